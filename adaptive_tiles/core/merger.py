import numpy as np
import time
from typing import Mapping, Optional, Tuple
import logging

from .structures import Tile, TileSet
from ..codec import decode, code_to_hash, hash_to_code, check_precision
from ..errors import AggregationError

logger = logging.getLogger(__name__)


class TileMerger:
    """
    Послойное слияние таблицы счётчиков в адаптивный набор тайлов

    На уровне L активные хеши группируются по префиксу длины L.
    Группа с суммой <= ёмкости становится тайлом и выбывает;
    группа с суммой > ёмкости остаётся активной для уровня L + 1.
    После последнего уровня оставшиеся хеши выдаются как неделимые листья.
    """

    def __init__(self, max_features: int, precision: Optional[int] = None):
        """
        Args:
            max_features: Ёмкость тайла C (>= 0)
            precision: Ожидаемая точность ключей; None - определить по таблице
        """
        if isinstance(max_features, bool) or not isinstance(max_features, (int, np.integer)):
            raise AggregationError(f"max_features must be an integer, got {max_features!r}")
        if max_features < 0:
            raise AggregationError(f"max_features must be >= 0, got {max_features}")

        self.max_features = int(max_features)
        self.precision = check_precision(precision) if precision is not None else None

        # Статистика последнего слияния
        self.stats = {}
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.stats = {
            'merge_time': 0.0,
            'input_keys': 0,
            'levels_processed': 0,
            'tiles_emitted': 0,
            'irreducible_tiles': 0,
            'levels': []
        }

    def merge(self, count_table: Mapping[str, int]) -> TileSet:
        """
        Слияние таблицы счётчиков

        Args:
            count_table: Хеш полной точности -> количество точек

        Returns:
            TileSet: префикс хеша (длины 1..P) -> Tile
        """
        start_time = time.perf_counter()
        self._reset_stats()

        codes, counts, precision = self._prepare(count_table)
        result = TileSet()

        if codes.size == 0:
            logger.debug("Empty count table, nothing to merge")
            return result

        logger.info(
            f"Merging {codes.size} cells ({int(counts.sum())} points) "
            f"at precision {precision}, capacity={self.max_features}"
        )

        active_codes, active_counts = codes, counts

        for level in range(1, precision + 1):
            if active_codes.size == 0:
                break

            active_codes, active_counts = self._merge_level(
                level, precision, active_codes, active_counts, result
            )

        # Неделимые листья: превышают ёмкость даже на полной точности
        for code, count in zip(active_codes.tolist(), active_counts.tolist()):
            key = code_to_hash(code, precision)
            result[key] = Tile.from_bbox(count, decode(key))
            result.irreducible.add(key)

        if active_codes.size:
            logger.debug(f"{active_codes.size} irreducible cells above capacity")

        self.stats['irreducible_tiles'] = int(active_codes.size)
        self.stats['tiles_emitted'] = len(result)
        self.stats['merge_time'] = time.perf_counter() - start_time

        logger.info(
            f"Merged into {len(result)} tiles in {self.stats['merge_time']:.3f}s "
            f"({self.stats['irreducible_tiles']} irreducible, "
            f"{self.stats['levels_processed']} levels)"
        )

        return result

    def _merge_level(self,
                     level: int,
                     precision: int,
                     active_codes: np.ndarray,
                     active_counts: np.ndarray,
                     result: TileSet) -> Tuple[np.ndarray, np.ndarray]:
        """
        Обработка одного уровня

        Returns:
            (codes, counts) хешей, оставшихся активными
        """
        # Префикс длины level - это старшие level бит кода
        prefixes = active_codes >> np.uint64(precision - level)

        group_prefixes, inverse = np.unique(prefixes, return_inverse=True)
        inverse = inverse.ravel()

        group_sums = np.zeros(group_prefixes.size, dtype=np.int64)
        np.add.at(group_sums, inverse, active_counts)

        over_capacity = group_sums > self.max_features

        # Группы в пределах ёмкости становятся тайлами
        within = ~over_capacity
        for prefix, total in zip(group_prefixes[within].tolist(), group_sums[within].tolist()):
            key = code_to_hash(prefix, level)
            result[key] = Tile.from_bbox(total, decode(key))

        # Члены переполненных групп переходят на следующий уровень без изменений
        keep = over_capacity[inverse]

        n_emitted = int(np.count_nonzero(within))
        self.stats['levels_processed'] = level
        self.stats['levels'].append({
            'level': level,
            'groups': int(group_prefixes.size),
            'emitted': n_emitted,
            'active_keys': int(np.count_nonzero(keep))
        })

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"[Level {level}] groups={group_prefixes.size}, emitted={n_emitted}, "
                f"over_capacity={int(np.count_nonzero(over_capacity))}, "
                f"active_keys={int(np.count_nonzero(keep))}"
            )

        return active_codes[keep], active_counts[keep]

    def _prepare(self, count_table: Mapping[str, int]) -> Tuple[np.ndarray, np.ndarray, int]:
        """
        Проверка таблицы и перевод в массивы

        Returns:
            (codes uint64, counts int64, precision)
        """
        precision = self.precision
        codes = []
        counts = []
        n_zero = 0

        for key, count in count_table.items():
            code = hash_to_code(key)

            if precision is None:
                precision = len(key)
            elif len(key) != precision:
                raise AggregationError(
                    f"Hash {key!r} has precision {len(key)}, expected {precision}"
                )

            if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
                raise AggregationError(f"Count for {key!r} must be an integer, got {count!r}")
            if count < 0:
                raise AggregationError(f"Count for {key!r} must be >= 0, got {count}")
            if count == 0:
                # Пустая ячейка не содержит точек и не даёт тайла
                n_zero += 1
                continue

            codes.append(code)
            counts.append(int(count))

        if n_zero:
            logger.debug(f"Skipped {n_zero} zero-count cells")

        self.stats['input_keys'] = len(codes)

        return (
            np.array(codes, dtype=np.uint64),
            np.array(counts, dtype=np.int64),
            precision if precision is not None else 0
        )
