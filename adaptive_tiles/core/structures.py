from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Optional
import numpy as np


@dataclass(frozen=True)
class BoundingBox:
    """
    Прямоугольник в градусах, соответствующий бинарному хешу

    Attributes:
        min_lon, min_lat: Нижний левый угол
        max_lon, max_lat: Верхний правый угол
    """
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def __post_init__(self):
        if self.min_lon > self.max_lon or self.min_lat > self.max_lat:
            raise ValueError("min corner must be <= max corner")

    def contains_point(self, latitude: float, longitude: float) -> bool:
        """Проверка принадлежности точки (границы включаются)"""
        return (self.min_lat <= latitude <= self.max_lat and
                self.min_lon <= longitude <= self.max_lon)

    def contains_box(self, other: 'BoundingBox') -> bool:
        return (self.min_lon <= other.min_lon and other.max_lon <= self.max_lon and
                self.min_lat <= other.min_lat and other.max_lat <= self.max_lat)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Tile:
    """
    Итоговый тайл

    Ключ (префикс хеша) хранится снаружи, в TileSet.

    Attributes:
        node_count: Количество точек в тайле (>= 1)
        min_lon, min_lat, max_lon, max_lat: Границы тайла в градусах
    """
    node_count: int
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def __post_init__(self):
        if self.node_count < 1:
            raise ValueError(f"node_count must be >= 1, got {self.node_count}")

    @classmethod
    def from_bbox(cls, node_count: int, bbox: BoundingBox) -> 'Tile':
        return cls(
            node_count=int(node_count),
            min_lon=bbox.min_lon,
            min_lat=bbox.min_lat,
            max_lon=bbox.max_lon,
            max_lat=bbox.max_lat,
        )

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def to_dict(self) -> dict:
        return asdict(self)


class TileSet(Dict[str, Tile]):
    """
    Результат слияния: префикс хеша -> Tile

    Ключи имеют разную длину (1..P). Отдельно запоминаются
    «неделимые» листья - ключи полной точности, которые превышают
    ёмкость даже на максимальном разрешении.
    """

    def __init__(self,
                 tiles: Optional[Dict[str, Tile]] = None,
                 irreducible: Iterable[str] = ()):
        super().__init__(tiles or {})
        self.irreducible = set(irreducible)

    def total_points(self) -> int:
        """Сумма node_count по всем тайлам"""
        return sum(tile.node_count for tile in self.values())

    def irreducible_keys(self) -> list:
        return sorted(self.irreducible)

    def find_key(self, full_hash: str) -> Optional[str]:
        """Ключ тайла, покрывающего хеш полной точности (или None)"""
        for length in range(1, len(full_hash) + 1):
            prefix = full_hash[:length]
            if prefix in self:
                return prefix
        return None

    def keys_by_level(self) -> Dict[int, list]:
        """Группировка ключей по длине префикса"""
        levels: Dict[int, list] = {}
        for key in sorted(self):
            levels.setdefault(len(key), []).append(key)
        return levels

    def get_stats(self) -> dict:
        """Статистика набора тайлов"""
        counts = [tile.node_count for tile in self.values()]
        lengths = [len(key) for key in self]
        return {
            'tile_count': len(counts),
            'total_points': sum(counts),
            'irreducible_count': len(self.irreducible),
            'min_node_count': min(counts) if counts else 0,
            'max_node_count': max(counts) if counts else 0,
            'median_node_count': int(np.median(counts)) if counts else 0,
            'min_level': min(lengths) if lengths else 0,
            'max_level': max(lengths) if lengths else 0,
        }
