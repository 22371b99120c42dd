from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

log = logging.getLogger("better_vmaf")


def extract_frame_scores(data: Dict[str, Any]) -> List[float]:
    """Return the per-frame ``vmaf`` values of a parsed libvmaf JSON log, in frame order."""
    frames = data.get("frames") or []
    if not isinstance(frames, list):
        raise RuntimeError(f"frames is a {type(frames).__name__}, expected a list")
    scores: List[float] = []
    for idx, frame in enumerate(frames):
        try:
            scores.append(float(frame["metrics"]["vmaf"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise RuntimeError(f"frame {idx} has no usable metrics.vmaf value") from exc
    return scores


def parse_vmaf_log(path: Path) -> List[float]:
    """Read the libvmaf JSON log at *path* and return its per-frame scores."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise RuntimeError(f"error reading VMAF log file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"error parsing VMAF log file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise RuntimeError(f"error parsing VMAF log file {path}: top level is not an object")

    try:
        scores = extract_frame_scores(data)
    except RuntimeError as exc:
        raise RuntimeError(f"error parsing VMAF log file {path}: {exc}") from exc

    log.debug("Parsed %d frame score(s) from %s", len(scores), Path(path).name)
    return scores
