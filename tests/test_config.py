import argparse
import json

import pytest

from adaptive_tiles.config import TilerConfig, DEFAULT_PRECISION, DEFAULT_MAX_FEATURES, MAX_PRECISION


def test_defaults():
    config = TilerConfig()
    config.validate()
    assert config.binary_hash_precision == DEFAULT_PRECISION
    assert config.max_features_per_tile == DEFAULT_MAX_FEATURES
    assert config.log_stats is True


@pytest.mark.parametrize('precision', [0, MAX_PRECISION + 1])
def test_invalid_precision(precision):
    with pytest.raises(ValueError, match='binary_hash_precision'):
        TilerConfig(binary_hash_precision=precision).validate()


def test_negative_capacity():
    with pytest.raises(ValueError, match='max_features_per_tile'):
        TilerConfig(max_features_per_tile=-1).validate()


def test_zero_capacity_is_valid():
    TilerConfig(max_features_per_tile=0).validate()


def test_save_and_load(tmp_path):
    path = tmp_path / 'nested' / 'config.json'
    config = TilerConfig(binary_hash_precision=11, max_features_per_tile=7, log_stats=False)
    config.save(path)

    assert json.loads(path.read_text(encoding='utf-8')) == {
        'binary_hash_precision': 11,
        'max_features_per_tile': 7,
        'log_stats': False,
    }
    assert TilerConfig.load(path) == config


def test_from_args_overrides_base():
    base = TilerConfig(binary_hash_precision=20, max_features_per_tile=99)
    args = argparse.Namespace(precision=None, max_features=5, no_stats=True)

    config = TilerConfig.from_args(args, base)
    assert config.binary_hash_precision == 20
    assert config.max_features_per_tile == 5
    assert config.log_stats is False
    # Базовая конфигурация не меняется
    assert base.max_features_per_tile == 99


def test_from_args_validates():
    args = argparse.Namespace(precision=100, max_features=None, no_stats=False)
    with pytest.raises(ValueError):
        TilerConfig.from_args(args)
