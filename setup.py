# setup.py
from setuptools import find_packages, setup

setup(
    name="driverfinder",
    version="0.1.0",
    packages=find_packages(include=["driverfinder", "driverfinder.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pygeohash>=1.2",
        "structlog>=23.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
)
