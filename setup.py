"""Setup configuration for xfactor."""

from setuptools import setup, find_packages

setup(
    name="xfactor",
    version="1.0.0",
    description="Accrual-time based site factor plugin for batch scheduler job priority",
    packages=find_packages(include=["xfactor", "xfactor.*"]),
    install_requires=[
        "click>=8.1.7",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "xfactor=xfactor.cli:cli",
        ],
    },
    python_requires=">=3.8",
)
