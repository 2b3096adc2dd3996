import numpy as np
from numpy.typing import ArrayLike
from types import MappingProxyType
from typing import Dict, Mapping
import logging

from ..codec import encode, encode_many, code_to_hash, check_precision
from ..config import DEFAULT_PRECISION

logger = logging.getLogger(__name__)


class PointCounter:
    """
    Накопитель координат: хеш полной точности -> количество точек

    Таблица принадлежит одному контексту накопления; для
    конкурентного добавления нужна внешняя синхронизация.
    """

    def __init__(self, precision: int = DEFAULT_PRECISION):
        """
        Args:
            precision: Точность хеша P (число бит)
        """
        self.precision = check_precision(precision)
        self._counts: Dict[str, int] = {}

    def add_coordinate(self, latitude: float, longitude: float) -> None:
        """Добавление одной координаты"""
        key = encode(latitude, longitude, self.precision)
        self._counts[key] = self._counts.get(key, 0) + 1

    def add_coordinates(self, latitudes: ArrayLike, longitudes: ArrayLike) -> int:
        """
        Пакетное добавление координат

        Эквивалентно последовательным вызовам add_coordinate.

        Args:
            latitudes: Широты (N,)
            longitudes: Долготы (N,)

        Returns:
            Количество добавленных точек
        """
        codes = encode_many(latitudes, longitudes, self.precision)
        if codes.size == 0:
            return 0

        unique_codes, counts = np.unique(codes, return_counts=True)
        for code, count in zip(unique_codes.tolist(), counts.tolist()):
            key = code_to_hash(code, self.precision)
            self._counts[key] = self._counts.get(key, 0) + count

        logger.debug(f"Added {codes.size} points into {unique_codes.size} cells")
        return int(codes.size)

    def snapshot(self) -> Mapping[str, int]:
        """Копия текущей таблицы только для чтения; состояние не меняется"""
        return MappingProxyType(dict(self._counts))

    @property
    def total_points(self) -> int:
        return sum(self._counts.values())

    def __len__(self) -> int:
        return len(self._counts)
