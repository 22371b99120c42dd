from __future__ import annotations

import os
from pathlib import PureWindowsPath
from typing import Optional, Sequence

from better_vmaf.config import VmafConfig


def to_filter_path(path: str, os_name: Optional[str] = None) -> str:
    """Make *path* safe to embed as a libvmaf ``log_path`` option.

    A Windows drive prefix (``C:``) would be read as an option separator by
    the filter graph parser, so it is dropped and backslashes become ``/``.
    Elsewhere the path is returned unchanged.
    """
    if (os_name or os.name) != "nt":
        return path
    win = PureWindowsPath(path)
    return win.as_posix()[len(win.drive):]


def thread_count(cfg: VmafConfig, compare_chroma: bool, cpu_count: Optional[int] = None) -> int:
    """Threads per libvmaf instance.

    Chroma mode runs three instances side by side, so each gets roughly a
    third of the CPUs.
    """
    if cfg.n_threads is not None:
        return cfg.n_threads
    cpus = cpu_count or os.cpu_count() or 1
    if compare_chroma:
        return cpus // 3 + 2
    return cpus


def libvmaf_options(
    log_path: str,
    cfg: VmafConfig,
    compare_chroma: bool,
    cpu_count: Optional[int] = None,
) -> str:
    # "\\\\:" keeps the model's inner ':' through graph and option unescaping
    return (
        f"n_threads={thread_count(cfg, compare_chroma, cpu_count)}"
        f":log_fmt=json:log_path={log_path}"
        f":model=version={cfg.model_version}\\\\:"
        f"motion.motion_force_zero={'false' if cfg.motion else 'true'}"
        f":n_subsample={cfg.subsampling}"
    )


def build_filter_graph(
    cfg: VmafConfig,
    log_paths: Sequence[str],
    compare_chroma: bool,
    cpu_count: Optional[int] = None,
) -> str:
    """Return the ``-filter_complex`` graph comparing input 0 (distorted) to input 1 (reference).

    Luma only, one libvmaf instance reads ``[dis][ref]``.  With chroma, both
    inputs are split into Y/U/V planes, each plane is scaled back to full
    resolution and compared by its own libvmaf instance writing to
    ``log_paths[i]``.
    """
    expected = 3 if compare_chroma else 1
    if len(log_paths) != expected:
        raise ValueError(f"expected {expected} log path(s), got {len(log_paths)}")

    size = f"{cfg.width}:{cfg.height}"
    parts = [
        f"[0:v:0]scale={size},format=yuv420p[dis]",
        f"[1:v:0]scale={size},format=yuv420p[ref]",
    ]

    if not compare_chroma:
        parts.append(
            "[dis][ref]libvmaf=" + libvmaf_options(log_paths[0], cfg, False, cpu_count)
        )
        return ";".join(parts)

    parts.append("[dis]extractplanes=y+u+v[dis_0][dis_1][dis_2]")
    parts.append("[ref]extractplanes=y+u+v[ref_0][ref_1][ref_2]")
    for i, log_path in enumerate(log_paths):
        parts.append(f"[dis_{i}]scale={size}[dis_{i}s]")
        parts.append(f"[ref_{i}]scale={size}[ref_{i}s]")
        parts.append(
            f"[dis_{i}s][ref_{i}s]libvmaf=" + libvmaf_options(log_path, cfg, True, cpu_count)
        )
    return ";".join(parts)


def build_ffmpeg_cmd(ffmpeg: str, cfg: VmafConfig, filter_graph: str) -> list[str]:
    return [
        ffmpeg,
        "-hide_banner",
        "-r", "1", "-i", cfg.distortion,
        "-r", "1", "-i", cfg.reference,
        "-filter_complex", filter_graph,
        "-f", "null", "-",
    ]
