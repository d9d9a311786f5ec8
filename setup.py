#!/usr/bin/env python3
"""
Setup script for Mathiverse hand gesture math games
"""

from pathlib import Path

from setuptools import setup

HERE = Path(__file__).parent


def read_requirements():
    """Read install requirements from requirements.txt"""
    lines = (HERE / "requirements.txt").read_text().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="mathiverse",
    version="0.1.0",
    description="Hand gesture controlled math games built on MediaPipe hand landmarks",
    packages=["mathiverse"],
    package_data={"mathiverse": ["config.default.yaml"]},
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "mathiverse=mathiverse.main:run_cli",
        ],
    },
)
