#!/usr/bin/env python3
"""Setup script for pokerboard-tools package."""

from setuptools import setup, find_packages

setup(
    name="pokerboard-tools",
    version="0.1.0",
    description="Poker board (flop/turn/river) image composer",
    author="Pokerboard Project",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.0.0",
        "Pillow>=10.1.0",
        "PyYAML>=6.0",
        "requests>=2.28.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pokerboard=pokerboard.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
