#!/usr/bin/env python
"""
Setup script for the tar-threshold package.

This package estimates threshold autoregressive (TAR) models by grid search
over constant and linearly time-varying thresholds.
"""
from setuptools import setup, find_packages

setup(
    name="tar-threshold",
    version="1.0.0",
    description="Threshold autoregression estimation with constant and time-varying thresholds",
    packages=find_packages(include=["tar_threshold", "tar_threshold.*"]),
    include_package_data=True,
    install_requires=[
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "matplotlib>=3.4.0",
        "statsmodels>=0.13.0",
        "scipy>=1.7.0",
        "pydantic>=2.0",
        "pyyaml>=5.4",
        "typer>=0.9.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tar-threshold=tar_threshold.cli.app:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.9",
)
