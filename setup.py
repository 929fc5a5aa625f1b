#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import sys
import setuptools

PACKAGE_NAME = "qcscalepy"
MINIMUM_PYTHON_VERSION_STR = "3.8"


def parse_version_tuple(version_str):
    """Parses a version string (e.g., "3.8") into a tuple (e.g., (3, 8))."""
    return tuple(map(int, version_str.split(".")))


MINIMUM_PYTHON_VERSION_TUPLE = parse_version_tuple(MINIMUM_PYTHON_VERSION_STR)


def check_python_version():
    """Exit when the Python version is too low."""
    if sys.version_info < MINIMUM_PYTHON_VERSION_TUPLE:
        sys.exit(
            f"Python {MINIMUM_PYTHON_VERSION_STR}+ is required. You are running "
            f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        )


def read_package_variable(key, filename="__init__.py"):
    """Read the value of a variable from the package without importing."""
    module_path = os.path.join(PACKAGE_NAME, filename)
    with open(module_path, encoding="utf-8") as module:
        for line in module:
            parts = line.strip().split(" ", 2)
            if parts[:-1] == [key, "="]:
                return parts[-1].strip("'")
    sys.exit(f"'{key}' not found in '{module_path}'")


def build_description():
    """Build a description for the project from documentation files."""
    readme_path = "README.md"
    try:
        with open(readme_path, "r", encoding="utf-8") as f:
            readme = f.read()
    except IOError:
        readme = "Rescale Source engine QC models, eyeballs and procedural bones included."
    return readme


check_python_version()

setuptools.setup(
    name=read_package_variable("__project__"),
    version=read_package_variable("__version__"),
    description="Rescale Source engine QC models, eyeballs and procedural bones included.",
    long_description=build_description(),
    long_description_content_type="text/markdown",
    license="MIT",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    python_requires=f">={MINIMUM_PYTHON_VERSION_STR}",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Topic :: Multimedia :: Graphics :: 3D Modeling",
    ],
    install_requires=[
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "qcscale=qcscalepy.scripts.qcscale:main",
        ]
    },
)
