#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Auto-MQM - Setup Configuration
MQM translation quality analysis: segmentation, TMX/XLIFF parsing, scoring.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]

# Test dependencies (pytest-asyncio runs the pipeline and evaluator coroutines)
test_requirements = [
    "pytest>=7.4.0",
    "pytest-asyncio>=0.21.0",
    "pytest-cov>=4.1.0",
]

setup(
    name="auto-mqm",
    version="1.0.0",
    description="MQM translation quality analysis with rule-based segmentation and TMX/XLIFF support",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Auto-MQM Team",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": test_requirements,

        # Development dependencies
        "dev": test_requirements + [
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mqm=mqm.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Linguistic",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="mqm translation quality tmx xliff segmentation localization",
)
