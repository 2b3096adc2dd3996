import pytest

from adaptive_tiles import Tiler, TilerConfig, TileSet
from adaptive_tiles.errors import AggregationError


def test_get_tiles(sample_coordinates):
    tiler = Tiler(TilerConfig(binary_hash_precision=11, max_features_per_tile=10_000_000))
    for lat, lon in sample_coordinates:
        tiler.add_coordinate(lat, lon)

    tiles = tiler.get_tiles()
    assert isinstance(tiles, TileSet)
    assert list(tiles) == ['1']
    assert tiles['1'].node_count == 5


def test_repeated_get_tiles_is_stable(clustered_coordinates):
    lats, lons = clustered_coordinates
    tiler = Tiler(TilerConfig(binary_hash_precision=18, max_features_per_tile=100))
    assert tiler.add_coordinates(lats, lons) == lats.size

    first = tiler.get_tiles()
    second = tiler.get_tiles()
    assert first == second
    assert first.total_points() == lats.size


def test_new_points_change_result():
    tiler = Tiler(TilerConfig(binary_hash_precision=12, max_features_per_tile=1))
    tiler.add_coordinate(10.0, 10.0)
    assert tiler.get_tiles().total_points() == 1

    tiler.add_coordinate(-10.0, 10.0)
    tiles = tiler.get_tiles()
    assert tiles.total_points() == 2
    assert all(tile.node_count == 1 for tile in tiles.values())


def test_default_config():
    tiler = Tiler()
    assert tiler.counter.precision == 32
    assert tiler.merger.max_features == 50_000
    assert tiler.get_tiles() == {}


def test_stats_logging_disabled(caplog):
    tiler = Tiler(TilerConfig(binary_hash_precision=8, max_features_per_tile=5, log_stats=False))
    tiler.add_coordinate(1.0, 1.0)
    with caplog.at_level('INFO', logger='adaptive_tiles.core.tiler'):
        tiler.get_tiles()
    assert not [r for r in caplog.records if r.name == 'adaptive_tiles.core.tiler']


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        Tiler(TilerConfig(binary_hash_precision=0))
    with pytest.raises(ValueError):
        Tiler(TilerConfig(max_features_per_tile=-5))


def test_tile_set_stats():
    tiles = Tiler(TilerConfig(binary_hash_precision=4, max_features_per_tile=1))
    tiles.add_coordinate(10.0, 10.0)
    tiles.add_coordinate(10.0, 10.0)
    tiles.add_coordinate(-10.0, -100.0)
    result = tiles.get_tiles()

    stats = result.get_stats()
    assert stats['tile_count'] == 2
    assert stats['total_points'] == 3
    assert stats['irreducible_count'] == 1
    assert stats['max_node_count'] == 2
    assert stats['min_level'] == 1
    assert stats['max_level'] == 4
    assert result.keys_by_level() == {1: ['0'], 4: [result.irreducible_keys()[0]]}


def test_aggregation_error_is_value_error():
    assert issubclass(AggregationError, ValueError)
