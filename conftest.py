import numpy as np
import pytest

# Точки из базового сценария: все попадают в одну ячейку на точности 11
SAMPLE_COORDINATES = [
    (1.0, 1.0),
    (1.0, 2.0),
    (2.0, 3.0),
    (4.0, 1.0),
    (1.5, 1.5),
]


@pytest.fixture
def sample_coordinates():
    return list(SAMPLE_COORDINATES)


@pytest.fixture
def clustered_coordinates():
    """Плотный кластер вокруг Берлина плюс равномерный фон по всему миру"""
    rng = np.random.default_rng(42)
    cluster_lat = rng.normal(52.5, 0.05, size=2000)
    cluster_lon = rng.normal(13.4, 0.05, size=2000)
    background_lat = rng.uniform(-89.0, 89.0, size=500)
    background_lon = rng.uniform(-179.0, 179.0, size=500)
    lats = np.concatenate([cluster_lat, background_lat])
    lons = np.concatenate([cluster_lon, background_lon])
    return lats, lons
