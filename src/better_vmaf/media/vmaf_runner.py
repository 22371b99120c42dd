from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List

from better_vmaf.config import VmafConfig
from better_vmaf.media.filter_graph import build_ffmpeg_cmd, build_filter_graph, to_filter_path
from better_vmaf.media.tools import ensure_tool, run_cmd
from better_vmaf.media.vmaf_log import parse_vmaf_log

log = logging.getLogger("better_vmaf")


def prepare_log_files(count: int) -> List[Path]:
    """Create *count* empty temporary files for libvmaf to write its logs into."""
    paths: List[Path] = []
    try:
        for _ in range(count):
            fd, name = tempfile.mkstemp(prefix="vmaf_log_", suffix=".json")
            os.close(fd)
            paths.append(Path(name))
    except OSError:
        cleanup_log_files(paths)
        raise
    return paths


def cleanup_log_files(paths: List[Path]) -> None:
    for p in paths:
        try:
            p.unlink(missing_ok=True)
        except OSError as exc:
            log.warning("Could not remove temporary log %s: %s", p, exc)


def compute_vmaf_scores(cfg: VmafConfig, compare_chroma: bool) -> List[List[float]]:
    """Run ffmpeg/libvmaf and return per-frame scores per channel.

    One series (luma) or three (Y, U, V) depending on *compare_chroma*.
    Temporary logs are removed however the run ends.
    """
    ffmpeg = ensure_tool("ffmpeg")
    log_paths = prepare_log_files(3 if compare_chroma else 1)
    try:
        graph = build_filter_graph(
            cfg, [to_filter_path(str(p)) for p in log_paths], compare_chroma,
        )
        cmd = build_ffmpeg_cmd(ffmpeg, cfg, graph)

        log.info(
            "Computing VMAF (%s) for %s against %s",
            "Y+U+V" if compare_chroma else "luma only",
            Path(cfg.distortion).name, Path(cfg.reference).name,
        )
        run_cmd(cmd, timeout=None)

        return [parse_vmaf_log(p) for p in log_paths]
    finally:
        cleanup_log_files(log_paths)
