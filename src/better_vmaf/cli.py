from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from typing import Optional, Sequence

from better_vmaf.config import DEFAULT_MODEL_VERSION, Config, ScoringConfig, VmafConfig
from better_vmaf.logging_utils import setup_logging
from better_vmaf.media.tools import ensure_tool
from better_vmaf.output.report import format_report
from better_vmaf.pipeline.compare import run_comparison, save_summary


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="better-vmaf",
        description="Compute luma and chroma VMAF scores with ffmpeg/libvmaf and combine them into one weighted score.",
    )

    # Inputs
    p.add_argument("-r", "--reference", required=True, help="reference video file for VMAF comparison")
    p.add_argument("-d", "--distortion", required=True, help="distorted video file for VMAF comparison")

    # VMAF computation
    p.add_argument(
        "--vmaf-subsampling", type=int, default=1,
        help="calculate every X frame for faster comparisons",
    )
    p.add_argument(
        "--vmaf-motion", action="store_true",
        help="enable temporal VMAF scoring (not recommended for high-quality targets)",
    )
    p.add_argument("--model-version", default=DEFAULT_MODEL_VERSION)
    p.add_argument("--width", type=int, default=1920)
    p.add_argument("--height", type=int, default=1080)
    p.add_argument("--threads", dest="n_threads", type=int, default=None)

    # Scoring
    p.add_argument(
        "--no-compare-chroma", dest="compare_chroma", action="store_false",
        help="disable chroma channels in VMAF scoring",
    )
    p.add_argument(
        "--chroma-weight", type=int, default=2,
        help="relative weight of luma to each chroma channel",
    )

    # Output
    p.add_argument("--summary-json", default=None)
    p.add_argument("-v", "--verbose", action="store_true")

    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    log = setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.vmaf_subsampling <= 0:
        print("vmaf-subsampling must be > 0", file=sys.stderr)
        sys.exit(2)
    if args.width <= 0 or args.height <= 0:
        print("width and height must be > 0", file=sys.stderr)
        sys.exit(2)
    if args.n_threads is not None and args.n_threads <= 0:
        print("threads must be > 0", file=sys.stderr)
        sys.exit(2)

    try:
        scoring = ScoringConfig(
            compare_chroma=args.compare_chroma,
            chroma_weight=args.chroma_weight,
        )
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)

    # Fail-fast tool check
    try:
        ensure_tool("ffmpeg")
    except RuntimeError as exc:
        log.error(str(exc))
        sys.exit(1)

    cfg = Config(
        vmaf=VmafConfig(
            reference=args.reference,
            distortion=args.distortion,
            subsampling=args.vmaf_subsampling,
            motion=args.vmaf_motion,
            model_version=args.model_version,
            width=args.width,
            height=args.height,
            n_threads=args.n_threads,
        ),
        scoring=scoring,
        summary_json=args.summary_json,
    )

    try:
        result = run_comparison(cfg)
    except (RuntimeError, ValueError, OSError, subprocess.CalledProcessError) as exc:
        log.error("VMAF comparison failed: %s", exc)
        sys.exit(2)

    print(format_report(result))

    if cfg.summary_json:
        try:
            save_summary(result, cfg)
        except OSError as exc:
            log.error("Could not write summary %s: %s", cfg.summary_json, exc)
            sys.exit(2)


if __name__ == "__main__":
    main()
