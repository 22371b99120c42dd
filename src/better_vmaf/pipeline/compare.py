from __future__ import annotations

import logging
from pathlib import Path

from better_vmaf.config import Config
from better_vmaf.media.vmaf_runner import compute_vmaf_scores
from better_vmaf.output.report import result_to_dict, write_summary
from better_vmaf.scoring.weighted import WeightedScoreResult, score_series

log = logging.getLogger("better_vmaf")


def run_comparison(cfg: Config) -> WeightedScoreResult:
    """Score the distorted video against the reference and aggregate the result."""
    series = compute_vmaf_scores(cfg.vmaf, cfg.scoring.compare_chroma)
    log.info("Collected %d frame score(s) per channel", len(series[0]))

    result = score_series(series, cfg.scoring)
    log.info("Final score: %.4f", result.final_score)
    return result


def save_summary(result: WeightedScoreResult, cfg: Config) -> Path:
    """Write the JSON summary to ``cfg.summary_json``; OSError propagates."""
    if not cfg.summary_json:
        raise ValueError("no summary_json path configured")
    out = Path(cfg.summary_json)
    write_summary(out, result_to_dict(result, cfg))
    log.info("Summary written to %s", out)
    return out
