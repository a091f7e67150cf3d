#!/usr/bin/env python3
"""
Setup script for handgesture
"""
from setuptools import find_packages, setup


setup(
    name="handgesture",
    version="0.1.0",
    description="Rule-based hand gesture classification from MediaPipe hand landmarks",
    packages=find_packages(include=["handgesture", "handgesture.*"]),
    package_data={"handgesture": ["config.default.yaml"]},
    python_requires=">=3.9",
    install_requires=[
        "opencv-python",
        "mediapipe",
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "handgesture=handgesture.main:main",
        ],
    },
)
