import pytest

from better_vmaf.config import Config, ScoringConfig, VmafConfig


def test_default_scoring_config():
    s = ScoringConfig()
    assert s.compare_chroma is True
    assert s.chroma_weight == 2


def test_default_vmaf_config():
    v = VmafConfig(reference="ref.mkv", distortion="dis.mkv")
    assert v.subsampling == 1
    assert v.motion is False
    assert v.model_version == "vmaf_v0.6.1"
    assert (v.width, v.height) == (1920, 1080)
    assert v.n_threads is None


def test_config_defaults():
    cfg = Config(vmaf=VmafConfig(reference="r", distortion="d"))
    assert cfg.scoring == ScoringConfig()
    assert cfg.summary_json is None


@pytest.mark.parametrize("weight", [0, -1, -4])
def test_non_positive_chroma_weight_rejected(weight):
    with pytest.raises(ValueError):
        ScoringConfig(compare_chroma=True, chroma_weight=weight)


def test_weight_ignored_without_chroma():
    s = ScoringConfig(compare_chroma=False, chroma_weight=0)
    assert s.compare_chroma is False


def test_configs_are_frozen():
    s = ScoringConfig()
    with pytest.raises(AttributeError):
        s.chroma_weight = 5  # type: ignore[misc]
