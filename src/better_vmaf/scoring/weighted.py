from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

import numpy as np

from better_vmaf.config import ScoringConfig
from better_vmaf.scoring.stats import ChannelStats, calculate_stats, empty_stats

log = logging.getLogger("better_vmaf")

CHANNEL_NAMES = ("Y", "U", "V")


@dataclass(frozen=True)
class SingleChannel:
    luma: ChannelStats

    def named(self) -> list[tuple[str, ChannelStats]]:
        return [("Y", self.luma)]


@dataclass(frozen=True)
class ThreeChannel:
    luma: ChannelStats
    chroma_u: ChannelStats
    chroma_v: ChannelStats

    def named(self) -> list[tuple[str, ChannelStats]]:
        return list(zip(CHANNEL_NAMES, (self.luma, self.chroma_u, self.chroma_v)))


Channels = Union[SingleChannel, ThreeChannel]


@dataclass(frozen=True)
class WeightedScoreResult:
    channels: Channels
    final_score: float
    # Statistics of the frame-by-frame weighted series, when series were available
    weighted_frames: Optional[ChannelStats] = None


def channels_from_series(series: Sequence[Sequence[float]]) -> Channels:
    """Compute per-channel statistics for 1 (luma) or 3 (Y, U, V) series."""
    if len(series) == 1:
        return SingleChannel(calculate_stats(series[0], "Y"))
    if len(series) == 3:
        y, u, v = (calculate_stats(s, name) for s, name in zip(series, CHANNEL_NAMES))
        return ThreeChannel(y, u, v)
    raise ValueError(f"expected 1 or 3 channel score series, got {len(series)}")


def aggregate(channels: Channels, scoring: ScoringConfig) -> WeightedScoreResult:
    """Combine per-channel geometric means into the final score.

    Luma only: the luma geometric mean.  With chroma:
    ``(y * w + u + v) / (w + 2)`` where ``w`` is ``scoring.chroma_weight``.
    """
    if isinstance(channels, SingleChannel):
        if scoring.compare_chroma:
            raise ValueError("chroma comparison requested but only luma statistics supplied")
        return WeightedScoreResult(channels=channels, final_score=channels.luma.geo_mean)

    if isinstance(channels, ThreeChannel):
        if not scoring.compare_chroma:
            raise ValueError("chroma statistics supplied but chroma comparison is disabled")
        w = scoring.chroma_weight
        final = (
            channels.luma.geo_mean * w + channels.chroma_u.geo_mean + channels.chroma_v.geo_mean
        ) / (w + 2)
        return WeightedScoreResult(channels=channels, final_score=final)

    raise TypeError(f"unsupported channel set: {type(channels).__name__}")


def weighted_frame_scores(
    luma: Sequence[float],
    chroma_u: Sequence[float],
    chroma_v: Sequence[float],
    chroma_weight: int,
) -> List[float]:
    """Blend the three planes frame by frame with the same weighting as :func:`aggregate`."""
    y = np.asarray(luma, dtype=np.float64)
    u = np.asarray(chroma_u, dtype=np.float64)
    v = np.asarray(chroma_v, dtype=np.float64)
    if not (y.size == u.size == v.size):
        raise ValueError(
            f"channel frame counts differ: Y={y.size} U={u.size} V={v.size}"
        )
    return ((y * chroma_weight + u + v) / (chroma_weight + 2)).tolist()


def score_series(
    series: Sequence[Sequence[float]],
    scoring: ScoringConfig,
) -> WeightedScoreResult:
    """Run statistics and weighting over raw per-frame series in one go."""
    result = aggregate(channels_from_series(series), scoring)

    if isinstance(result.channels, ThreeChannel):
        lengths = [len(s) for s in series]
        if len(set(lengths)) == 1:
            blended = weighted_frame_scores(series[0], series[1], series[2], scoring.chroma_weight)
            weighted = calculate_stats(blended, "weighted")
        else:
            # Channel stats and final score stay valid; only the frame blend is undefined
            log.warning(
                "Channel frame counts differ (Y=%d U=%d V=%d); weighted frame scores are undefined",
                *lengths,
            )
            weighted = empty_stats()
    else:
        weighted = result.channels.luma
    result = replace(result, weighted_frames=weighted)

    log.debug("Final score %.4f over %d frame(s)", result.final_score, len(series[0]))
    return result
