#!/usr/bin/env python3

from setuptools import find_packages, setup

PACKAGE_NAME = "scene_waypoints"

setup(
    name=PACKAGE_NAME,
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "setuptools",
        "numpy",
        "matplotlib",
        "Pillow",
        "PyYAML",
        "pydantic>=2",
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=True,
    maintainer="scene_waypoints developers",
    description="Interactive editor for drawing waypoint paths on georeferenced scene images",
    license="Apache-2.0",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [
            "scene-waypoints = scene_waypoints.cli:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
