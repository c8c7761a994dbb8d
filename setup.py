#!/usr/bin/env python3
"""
HexoDB Setup Script
===================
Allows installation of the hexodb client package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
"""

from setuptools import setup, find_packages

setup(
    name="hexodb",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "hexodb=hexodb.cli:main",
        ],
    },
)
