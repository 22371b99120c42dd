from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

log = logging.getLogger("better_vmaf")


@dataclass(frozen=True)
class ChannelStats:
    mean: float
    geo_mean: float
    min: float
    max: float
    std_dev: float  # population (divisor n)
    count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def empty_stats() -> ChannelStats:
    """Statistics for a channel with no frames: every value is NaN."""
    nan = math.nan
    return ChannelStats(mean=nan, geo_mean=nan, min=nan, max=nan, std_dev=nan, count=0)


def calculate_stats(scores: Sequence[float], channel: str = "Y") -> ChannelStats:
    """Summarise one channel's per-frame scores.

    The geometric mean is computed in the log domain so long series cannot
    overflow.  Scores <= 0 are not rejected: ``log(0)`` drives the geometric
    mean to 0 and a negative score makes it NaN.  The standard deviation uses
    the population divisor ``n``.

    An empty series yields :func:`empty_stats` instead of raising.
    """
    arr = np.asarray(scores, dtype=np.float64)
    if arr.size == 0:
        log.warning("No frame scores for %s channel; statistics are undefined", channel)
        return empty_stats()

    if np.any(arr <= 0.0):
        log.warning(
            "%s channel has %d non-positive score(s); geometric mean is not meaningful",
            channel, int(np.count_nonzero(arr <= 0.0)),
        )

    with np.errstate(divide="ignore", invalid="ignore"):
        geo_mean = float(np.exp(np.mean(np.log(arr))))

    return ChannelStats(
        mean=float(np.mean(arr)),
        geo_mean=geo_mean,
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        std_dev=float(np.std(arr)),  # ddof=0
        count=int(arr.size),
    )
