from __future__ import annotations

import json
import math
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from better_vmaf.config import Config
from better_vmaf.scoring.stats import ChannelStats
from better_vmaf.scoring.weighted import WeightedScoreResult

_LABEL_WIDTH = 20


def format_stats(stats: ChannelStats) -> str:
    rows = [
        ("Mean", stats.mean),
        ("Geometric Mean", stats.geo_mean),
        ("Min", stats.min),
        ("Max", stats.max),
        ("Standard Deviation", stats.std_dev),
    ]
    return "\n".join(f"{label:<{_LABEL_WIDTH}}: {value:.2f}" for label, value in rows)


def format_report(result: WeightedScoreResult) -> str:
    """Render per-channel statistics and the final score as plain text."""
    blocks: List[str] = ["VMAF Score Result:"]
    for name, stats in result.channels.named():
        blocks.append(f"{name} channel\n{format_stats(stats)}")
    if result.weighted_frames is not None:
        blocks.append(f"Weighted Scores\n{format_stats(result.weighted_frames)}")
    blocks.append(f"Final Score: {result.final_score:.6f}")
    return "\n\n".join(blocks)


def _stats_dict(stats: ChannelStats) -> Dict[str, Any]:
    # JSON has no NaN; undefined statistics become null
    return {
        k: (None if isinstance(v, float) and math.isnan(v) else v)
        for k, v in asdict(stats).items()
    }


def result_to_dict(result: WeightedScoreResult, cfg: Optional[Config] = None) -> Dict[str, Any]:
    summary: Dict[str, Any] = {
        "created_utc": datetime.now(timezone.utc).isoformat(),
        "channels": {name: _stats_dict(stats) for name, stats in result.channels.named()},
        "weighted_frames": (
            _stats_dict(result.weighted_frames) if result.weighted_frames is not None else None
        ),
        "final_score": None if math.isnan(result.final_score) else result.final_score,
    }
    if cfg is not None:
        summary["params"] = {
            "reference": cfg.vmaf.reference,
            "distortion": cfg.vmaf.distortion,
            "subsampling": cfg.vmaf.subsampling,
            "motion": cfg.vmaf.motion,
            "model_version": cfg.vmaf.model_version,
            "compare_chroma": cfg.scoring.compare_chroma,
            "chroma_weight": cfg.scoring.chroma_weight,
        }
    return summary


def write_summary(path: Path, summary: Dict[str, Any]) -> None:
    """Serialise *summary* as pretty-printed JSON to *path*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
