from numpy.typing import ArrayLike
from typing import Optional
import logging

from .counter import PointCounter
from .merger import TileMerger
from .structures import TileSet
from ..config import TilerConfig

logger = logging.getLogger(__name__)


class Tiler:
    """Накопление координат и построение адаптивных тайлов по конфигурации"""

    def __init__(self, config: Optional[TilerConfig] = None):
        self.config = config if config is not None else TilerConfig()
        self.config.validate()

        self.counter = PointCounter(self.config.binary_hash_precision)
        self.merger = TileMerger(
            self.config.max_features_per_tile,
            precision=self.config.binary_hash_precision
        )

    def add_coordinate(self, latitude: float, longitude: float) -> None:
        self.counter.add_coordinate(latitude, longitude)

    def add_coordinates(self, latitudes: ArrayLike, longitudes: ArrayLike) -> int:
        return self.counter.add_coordinates(latitudes, longitudes)

    def get_tiles(self) -> TileSet:
        """
        Построение тайлов по текущему снимку счётчика

        Накопленное состояние не меняется, поэтому повторный вызов
        без новых координат возвращает тот же результат.
        """
        tiles = self.merger.merge(self.counter.snapshot())

        if self.config.log_stats:
            stats = tiles.get_stats()
            logger.info(
                f"Tiles: {stats['tile_count']} "
                f"(levels {stats['min_level']}..{stats['max_level']}), "
                f"points={stats['total_points']}, "
                f"node_count min/median/max="
                f"{stats['min_node_count']}/{stats['median_node_count']}/{stats['max_node_count']}"
            )

        return tiles
