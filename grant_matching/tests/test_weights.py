"""Tests for loading and saving rating weights."""

import json

import pytest
import yaml

from grant_matching.rating import DEFAULT_WEIGHTS, RatingWeights, load_weights, save_weights


def test_no_file_returns_defaults():
    assert load_weights(None) is DEFAULT_WEIGHTS
    assert load_weights("") is DEFAULT_WEIGHTS


def test_load_json(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"match": 0.5, "value": 0.25, "ease": 0.25, "version": "exp-1"}))

    weights = load_weights(str(path))
    assert weights.match == 0.5
    assert weights.value == 0.25
    assert weights.version == "exp-1"


def test_load_yaml(tmp_path):
    path = tmp_path / "weights.yml"
    path.write_text(yaml.dump({"match": 0.2, "value": 0.4, "ease": 0.4}))

    weights = load_weights(str(path))
    assert weights.ease == 0.4
    assert weights.version == "1.0"


def test_save_and_reload(tmp_path):
    custom = RatingWeights(match=0.7, value=0.1, ease=0.2, version="saved")
    for name in ("weights.json", "weights.yaml"):
        path = tmp_path / name
        save_weights(custom, str(path))
        assert load_weights(str(path)) == custom


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_weights(str(tmp_path / "absent.json"))


def test_unsupported_format(tmp_path):
    path = tmp_path / "weights.toml"
    path.write_text("match = 0.4")
    with pytest.raises(ValueError, match="Unsupported file format"):
        load_weights(str(path))

    with pytest.raises(ValueError):
        save_weights(DEFAULT_WEIGHTS, str(tmp_path / "weights.txt"))


def test_invalid_weights_in_file(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"match": 0.9, "value": 0.9, "ease": 0.9}))
    with pytest.raises(ValueError):
        load_weights(str(path))


def test_empty_yaml_rejected(tmp_path):
    path = tmp_path / "weights.yaml"
    path.write_text("")
    with pytest.raises(ValueError, match="mapping"):
        load_weights(str(path))


def test_suffix_case_insensitive(tmp_path):
    path = tmp_path / "WEIGHTS.JSON"
    path.write_text(json.dumps({"match": 0.4, "value": 0.4, "ease": 0.2}))
    assert load_weights(str(path)).value == 0.4
