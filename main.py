#!/usr/bin/env python
"""
Adaptive Tiles - Точка входа для CLI

Построение адаптивных тайлов по бинарному геохешу для набора координат
"""
import psutil
import os
import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


def setup_logging(log_path: Path, verbose: bool):
    """Настраивает раздельное логирование в файл и консоль."""
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Уровень для файла всегда DEBUG, для консоли - в зависимости от флага --verbose
    console_level = logging.DEBUG if verbose else logging.INFO
    file_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Убираем все предыдущие обработчики, чтобы избежать дублирования
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(console_handler)


# Импорты модулей проекта
from adaptive_tiles import __version__
from adaptive_tiles.config import TilerConfig, DEFAULT_PRECISION, DEFAULT_MAX_FEATURES
from adaptive_tiles.core.tiler import Tiler


def parse_point(value: str) -> Tuple[float, float]:
    """Разбор аргумента вида 'LAT,LON'"""
    parts = value.split(',')
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Expected LAT,LON, got {value!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Non-numeric coordinate: {value!r}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Парсинг аргументов командной строки"""
    parser = argparse.ArgumentParser(
        description='Adaptive Tiles - адаптивное разбиение координат на тайлы',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Примеры использования:
    %(prog)s --point 1.0,1.0 --point 1.0,2.0 --precision 11
    %(prog)s --point 52.5,13.4 --max-features 0 --verbose
            """
    )

    parser.add_argument('--point', '-p', action='append', type=parse_point, default=[],
                        metavar='LAT,LON',
                        help='Координата (можно несколько раз)')
    parser.add_argument('--output', '-o', default='output', type=str,
                        help='Директория для лога (по умолчанию: output)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    group_tiles = parser.add_argument_group('Параметры тайлов')
    group_tiles.add_argument('--precision', type=int,
                             help=f'Точность хеша в битах (по умолчанию: {DEFAULT_PRECISION})')
    group_tiles.add_argument('--max-features', type=int,
                             help=f'Максимум точек в тайле (по умолчанию: {DEFAULT_MAX_FEATURES})')

    group_debug = parser.add_argument_group('Отладка')
    group_debug.add_argument('--verbose', '-v', action='store_true',
                             help='Подробный вывод')
    group_debug.add_argument('--no-stats', action='store_true',
                             help='Не логировать статистику тайлов')

    parser.add_argument('--config', type=str,
                        help='Путь к файлу конфигурации JSON')
    parser.add_argument('--save-config', type=str,
                        help='Сохранить текущую конфигурацию в файл')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Основная функция"""
    args = parse_arguments(argv)
    output_dir = Path(args.output)
    log_file_path = output_dir / 'tiles_log.txt'
    setup_logging(log_file_path, args.verbose)
    logger.info(f"Detailed logs are being saved to {log_file_path}")
    process = psutil.Process(os.getpid())
    try:
        # ============ 1. Загрузка конфигурации ============
        base = None
        if args.config:
            logger.info(f"Loading config from {args.config}")
            config_path = Path(args.config)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")
            base = TilerConfig.load(config_path)
        config = TilerConfig.from_args(args, base)

        if args.save_config:
            config.save(Path(args.save_config))
            logger.info(f"Config saved to {args.save_config}")

        # ============ 2. Накопление координат ============
        tiler = Tiler(config)
        for latitude, longitude in args.point:
            tiler.add_coordinate(latitude, longitude)
        logger.info(
            f"Counted {tiler.counter.total_points} points "
            f"in {len(tiler.counter)} cells at precision {config.binary_hash_precision}"
        )

        # ============ 3. Слияние ============
        cpu_time_before = process.cpu_times()
        start_time = time.perf_counter()
        tiles = tiler.get_tiles()
        merge_time = time.perf_counter() - start_time
        cpu_time_after = process.cpu_times()

        cpu_time_sec = (cpu_time_after.user - cpu_time_before.user) + \
                       (cpu_time_after.system - cpu_time_before.system)
        memory_mb = process.memory_info().rss / (1024 * 1024)
        logger.debug(f"Merge: wall={merge_time:.3f}s, cpu={cpu_time_sec:.3f}s, rss={memory_mb:.1f} MB")

        # ============ 4. Итоговая информация ============
        for key in sorted(tiles, key=lambda k: (len(k), k)):
            tile = tiles[key]
            marker = ' (irreducible)' if key in tiles.irreducible else ''
            logger.info(
                f"{key}: node_count={tile.node_count} "
                f"lon=[{tile.min_lon}, {tile.max_lon}] lat=[{tile.min_lat}, {tile.max_lat}]{marker}"
            )

        logger.info("=" * 60)
        logger.info(f"Adaptive tiling completed: {len(tiles)} tiles")
        logger.info("=" * 60)

        return 0

    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 130

    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1

    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        return 2

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 255


if __name__ == '__main__':
    sys.exit(main())
