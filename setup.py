#!/usr/bin/env python3
"""
Setup script for Tetrix
"""

from setuptools import setup, find_packages
import os

HERE = os.path.dirname(os.path.abspath(__file__))


# Read the README file
def read_readme():
    with open(os.path.join(HERE, "README.md"), "r", encoding="utf-8") as fh:
        return fh.read()


# Read requirements
def read_requirements():
    with open(os.path.join(HERE, "requirements.txt"), "r", encoding="utf-8") as fh:
        return [line.strip() for line in fh if line.strip() and not line.startswith("#")]


setup(
    name="tetrix",
    version="0.1.0",
    description="Tetrix: a falling-block puzzle simulation core",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "tetrix=tetrix.cli:main",
        ],
    },
    keywords=[
        "tetris",
        "puzzle",
        "simulation",
        "gymnasium",
    ],
)
