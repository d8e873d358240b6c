#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup configuration for SingleMarketRobotSim package
"""

from setuptools import setup, find_packages

setup(
    name="SingleMarketRobotSim",
    version="0.1.0",
    description="Repeated double-auction simulation with robot traders",
    author="Peter Millington",
    packages=find_packages(where="SMRS"),
    package_dir={"": "SMRS"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "matplotlib>=3.3.0",
        "pandas>=1.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
        ]
    },
)
