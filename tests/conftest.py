"""Shared helpers for VMAF runner and pipeline tests."""
from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

# ---------------------------------------------------------------------------
# libvmaf JSON log builders
# ---------------------------------------------------------------------------

def build_vmaf_log_json(scores: Sequence[float]) -> Dict[str, Any]:
    """Build a libvmaf ``log_fmt=json`` document with one frame per score."""
    return {
        "version": "2.3.1",
        "fps": 24.0,
        "frames": [
            {
                "frameNum": i,
                "metrics": {
                    "integer_adm2": 0.98,
                    "integer_motion": 0.0,
                    "vmaf": score,
                },
            }
            for i, score in enumerate(scores)
        ],
        "pooled_metrics": {},
    }


def write_vmaf_log(path: Path, scores: Sequence[float]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_vmaf_log_json(scores)), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Side-effect factory for run_cmd
# ---------------------------------------------------------------------------

_LOG_PATH_RE = re.compile(r"log_path=([^:;]+)")


def log_paths_in_cmd(cmd: List[str]) -> List[str]:
    """Return the libvmaf ``log_path`` values of an ffmpeg command, in graph order."""
    graph = cmd[cmd.index("-filter_complex") + 1]
    return _LOG_PATH_RE.findall(graph)


def make_ffmpeg_side_effect(
    channel_scores: Sequence[Sequence[float]],
    calls: List[List[str]] | None = None,
) -> Callable:
    """Return a ``run_cmd`` side_effect that behaves like ffmpeg with libvmaf.

    Each ``log_path`` in the filter graph receives the matching entry of
    *channel_scores*.  Commands are appended to *calls* when given.
    """
    def side_effect(cmd, timeout=120):
        if calls is not None:
            calls.append(list(cmd))
        for path, scores in zip(log_paths_in_cmd(cmd), channel_scores):
            write_vmaf_log(Path(path), scores)
        return subprocess.CompletedProcess(
            args=cmd, returncode=0, stdout="", stderr="",
        )
    return side_effect


def make_failing_side_effect(returncode: int = 1) -> Callable:
    """Return a ``run_cmd`` side_effect that fails like a broken ffmpeg run."""
    def side_effect(cmd, timeout=120):
        raise subprocess.CalledProcessError(
            returncode, cmd, output="", stderr="No such filter: 'libvmaf'",
        )
    return side_effect
