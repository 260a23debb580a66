#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="gridbayes",
    version="0.1.0",
    description="Grid approximation of one-parameter Bayesian posteriors",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    packages=find_packages(exclude=["tests*", "docs*", "notebooks*", "examples*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "prefect>=3.0",
        "matplotlib>=3.5",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
