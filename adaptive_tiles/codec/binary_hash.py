"""
Бинарный геохеш: кодирование координат в строку из '0'/'1' и обратно

Пространство делится пополам поочерёдно: чётные биты делят долготу,
нечётные - широту. Бит равен 1, если значение >= середины интервала.
Любой префикс хеша - тоже корректный хеш, прямоугольник которого
содержит прямоугольник полного хеша.
"""
import numpy as np
from numpy.typing import ArrayLike
import logging

from ..config import MAX_PRECISION, LAT_RANGE, LON_RANGE
from ..core.structures import BoundingBox
from ..errors import CodecError

logger = logging.getLogger(__name__)


def check_precision(precision: int) -> int:
    """Проверка допустимости точности хеша"""
    if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)):
        raise CodecError(f"Precision must be an integer, got {precision!r}")
    if not 1 <= precision <= MAX_PRECISION:
        raise CodecError(f"Precision must be in [1, {MAX_PRECISION}], got {precision}")
    return int(precision)


def check_hash(binary_hash: str) -> str:
    """Проверка строки хеша: непустая, только '0'/'1', не длиннее MAX_PRECISION"""
    if not isinstance(binary_hash, str):
        raise CodecError(f"Binary hash must be a string, got {type(binary_hash).__name__}")
    if not binary_hash:
        raise CodecError("Binary hash must not be empty")
    if len(binary_hash) > MAX_PRECISION:
        raise CodecError(f"Binary hash longer than {MAX_PRECISION} bits: {len(binary_hash)}")
    if binary_hash.strip('01'):
        raise CodecError(f"Malformed binary hash: {binary_hash!r}")
    return binary_hash


def encode_many(latitudes: ArrayLike,
                longitudes: ArrayLike,
                precision: int) -> np.ndarray:
    """
    Векторное кодирование координат в целочисленные коды хеша

    Args:
        latitudes: Широты (N,)
        longitudes: Долготы (N,)
        precision: Число бит хеша

    Returns:
        Массив кодов (N,), dtype uint64; старший бит - первый символ хеша
    """
    precision = check_precision(precision)

    lats = np.asarray(latitudes, dtype=np.float64).ravel()
    lons = np.asarray(longitudes, dtype=np.float64).ravel()

    if lats.shape != lons.shape:
        raise CodecError(
            f"Latitude/longitude length mismatch: {lats.size} != {lons.size}"
        )
    if not (np.all(np.isfinite(lats)) and np.all(np.isfinite(lons))):
        raise CodecError("Coordinates must be finite numbers")

    n = lats.size
    codes = np.zeros(n, dtype=np.uint64)

    # Текущие интервалы для каждой точки
    lon_lo = np.full(n, LON_RANGE[0])
    lon_hi = np.full(n, LON_RANGE[1])
    lat_lo = np.full(n, LAT_RANGE[0])
    lat_hi = np.full(n, LAT_RANGE[1])

    one = np.uint64(1)
    for bit in range(precision):
        if bit % 2 == 0:
            values, lo, hi = lons, lon_lo, lon_hi
        else:
            values, lo, hi = lats, lat_lo, lat_hi

        mid = (lo + hi) / 2.0
        upper = values >= mid

        codes = (codes << one) | upper.astype(np.uint64)

        # Сужение интервалов на месте
        lo[upper] = mid[upper]
        hi[~upper] = mid[~upper]

    return codes


def code_to_hash(code: int, precision: int) -> str:
    """Целочисленный код -> строка хеша фиксированной длины"""
    precision = check_precision(precision)
    code = int(code)
    if code < 0 or code >> precision:
        raise CodecError(f"Code {code} does not fit into {precision} bits")
    return format(code, f'0{precision}b')


def hash_to_code(binary_hash: str) -> int:
    """Строка хеша -> целочисленный код"""
    return int(check_hash(binary_hash), 2)


def encode(latitude: float, longitude: float, precision: int) -> str:
    """
    Кодирование одной координаты

    Args:
        latitude: Широта в градусах
        longitude: Долгота в градусах
        precision: Число бит хеша

    Returns:
        Строка из '0'/'1' длины precision
    """
    codes = encode_many([latitude], [longitude], precision)
    return code_to_hash(int(codes[0]), precision)


def decode(binary_hash: str) -> BoundingBox:
    """
    Декодирование хеша в ограничивающий прямоугольник

    Args:
        binary_hash: Строка из '0'/'1' (любой длины 1..MAX_PRECISION)

    Returns:
        BoundingBox области, которую обозначает хеш
    """
    check_hash(binary_hash)

    lon_lo, lon_hi = LON_RANGE
    lat_lo, lat_hi = LAT_RANGE

    for i, symbol in enumerate(binary_hash):
        if i % 2 == 0:
            mid = (lon_lo + lon_hi) / 2.0
            if symbol == '1':
                lon_lo = mid
            else:
                lon_hi = mid
        else:
            mid = (lat_lo + lat_hi) / 2.0
            if symbol == '1':
                lat_lo = mid
            else:
                lat_hi = mid

    return BoundingBox(min_lon=lon_lo, min_lat=lat_lo, max_lon=lon_hi, max_lat=lat_hi)
