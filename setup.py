"""
Setup script for slice-service project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="slice-service",
    version="0.1.0",
    packages=find_packages(include=["slice_service", "slice_service.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "pydantic>=2",
        "pydantic-settings>=2",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
