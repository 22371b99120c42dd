from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from conftest import build_vmaf_log_json, write_vmaf_log
from better_vmaf.media.vmaf_log import extract_frame_scores, parse_vmaf_log


def test_scores_in_frame_order():
    with tempfile.TemporaryDirectory() as td:
        p = write_vmaf_log(Path(td) / "log.json", [91.2, 88.0, 95.5])
        assert parse_vmaf_log(p) == [91.2, 88.0, 95.5]


def test_no_frames_key_gives_empty_list():
    assert extract_frame_scores({"version": "2.3.1"}) == []


def test_empty_frames():
    assert extract_frame_scores(build_vmaf_log_json([])) == []


def test_missing_vmaf_metric():
    data = {"frames": [{"metrics": {"vmaf": 90.0}}, {"metrics": {"psnr_y": 40.0}}]}
    with pytest.raises(RuntimeError, match="frame 1"):
        extract_frame_scores(data)


def test_invalid_json():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "log.json"
        p.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuntimeError, match="error parsing"):
            parse_vmaf_log(p)


def test_empty_file_from_failed_run():
    """libvmaf never wrote to the temp file."""
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "log.json"
        p.touch()
        with pytest.raises(RuntimeError):
            parse_vmaf_log(p)


def test_missing_file():
    with pytest.raises(RuntimeError, match="error reading"):
        parse_vmaf_log(Path("/nonexistent/vmaf_log.json"))


def test_top_level_not_object():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "log.json"
        p.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        with pytest.raises(RuntimeError):
            parse_vmaf_log(p)


def test_null_frames_gives_empty_list():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "log.json"
        p.write_text(json.dumps({"frames": None}), encoding="utf-8")
        assert parse_vmaf_log(p) == []


def test_frames_not_a_list():
    with tempfile.TemporaryDirectory() as td:
        p = Path(td) / "log.json"
        p.write_text(json.dumps({"frames": {"0": {"metrics": {"vmaf": 90.0}}}}), encoding="utf-8")
        with pytest.raises(RuntimeError, match="expected a list"):
            parse_vmaf_log(p)
