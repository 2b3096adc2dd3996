"""
Конфигурация и константы адаптивного тайлинга
"""
from dataclasses import dataclass
import json
from pathlib import Path

# ============ КОНСТАНТЫ ============

# Точность бинарного хеша (число бит)
MAX_PRECISION = 62  # Код хеша хранится в uint64
DEFAULT_PRECISION = 32

# Ёмкость тайла
DEFAULT_MAX_FEATURES = 50_000

# Пространство адресов
LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 180.0)


@dataclass
class TilerConfig:
    """Конфигурация тайлера"""

    # ======== Бинарный хеш ========
    binary_hash_precision: int = DEFAULT_PRECISION

    # ======== Ёмкость тайла ========
    max_features_per_tile: int = DEFAULT_MAX_FEATURES  # Равенство ёмкости допустимо

    # ======== Прочие параметры ========
    log_stats: bool = True  # Логировать статистику после слияния

    def validate(self) -> None:
        """Проверка корректности конфигурации"""
        if not 1 <= self.binary_hash_precision <= MAX_PRECISION:
            raise ValueError(
                f"binary_hash_precision должна быть в диапазоне [1, {MAX_PRECISION}], "
                f"получено: {self.binary_hash_precision}"
            )

        if self.max_features_per_tile < 0:
            raise ValueError(
                f"max_features_per_tile должно быть >= 0, получено: {self.max_features_per_tile}"
            )

    def save(self, path: Path) -> None:
        """Сохранение конфигурации в JSON"""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.__dict__, f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path) -> 'TilerConfig':
        """Загрузка конфигурации из JSON"""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls(**data)

    @classmethod
    def from_args(cls, args, base: 'TilerConfig' = None) -> 'TilerConfig':
        """
        Создание конфигурации из аргументов командной строки

        Args:
            args: Пространство имён argparse
            base: Конфигурация из файла, поверх которой применяются аргументы
        """
        config = cls(**base.__dict__) if base is not None else cls()

        if getattr(args, 'precision', None) is not None:
            config.binary_hash_precision = args.precision
        if getattr(args, 'max_features', None) is not None:
            config.max_features_per_tile = args.max_features
        if getattr(args, 'no_stats', False):
            config.log_stats = False

        config.validate()
        return config
