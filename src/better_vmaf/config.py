from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_MODEL_VERSION = "vmaf_v0.6.1"


@dataclass(frozen=True)
class ScoringConfig:
    compare_chroma: bool = True
    # Luma counts chroma_weight times as much as each chroma plane
    chroma_weight: int = 2

    def __post_init__(self) -> None:
        if self.compare_chroma and self.chroma_weight <= 0:
            raise ValueError(
                f"chroma_weight must be a positive integer, got {self.chroma_weight}"
            )


@dataclass(frozen=True)
class VmafConfig:
    reference: str
    distortion: str
    subsampling: int = 1
    motion: bool = False
    model_version: str = DEFAULT_MODEL_VERSION
    width: int = 1920
    height: int = 1080
    n_threads: Optional[int] = None  # None = derive from CPU count


@dataclass(frozen=True)
class Config:
    vmaf: VmafConfig
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    # Output
    summary_json: Optional[str] = None
