from __future__ import annotations
from typing import Any

# 1) Версия пакета
try:
    from importlib.metadata import version as _pkg_version
except ImportError:
    _pkg_version = None  # type: ignore

try:
    __version__ = _pkg_version("adaptive-tiles") if _pkg_version else "0.1.0"
except Exception:
    # в editable/develop-режиме пакет может быть не «установлен»
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "TilerConfig",
    "Tiler",
    "PointCounter",
    "TileMerger",
    "Tile",
    "TileSet",
]

_LAZY = {
    "TilerConfig": ".config",
    "Tiler": ".core.tiler",
    "PointCounter": ".core.counter",
    "TileMerger": ".core.merger",
    "Tile": ".core.structures",
    "TileSet": ".core.structures",
}


# 2) Ленивый экспорт публичного API
def __getattr__(name: str) -> Any:
    if name in _LAZY:
        from importlib import import_module
        return getattr(import_module(_LAZY[name], __name__), name)
    raise AttributeError(name)
