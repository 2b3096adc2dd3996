"""
Setup script for Adaptive Tiles package
"""
from setuptools import setup, find_packages
from pathlib import Path

# Чтение README для long_description
this_directory = Path(__file__).parent
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding='utf-8')
else:
    long_description = "Adaptive Tiles - capacity-bounded tile pyramid over a binary geohash"

setup(
    name="adaptive-tiles",
    version="0.1.0",
    description="Adaptive tile pyramid: coarsest binary-geohash tiles with bounded point count",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: GIS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",

    # Зависимости
    install_requires=[
        "numpy>=1.21.0",
        "psutil>=5.8.0",
    ],

    # Опциональные зависимости
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
        ],
    },

    # Точка входа для CLI
    entry_points={
        "console_scripts": [
            "adaptive-tiles=main:main",
        ],
    },

    include_package_data=True,
    zip_safe=False,
)
