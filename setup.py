#!/usr/bin/env python3

from setuptools import find_packages, setup

setup(
    name="arpafilter",
    version="0.1.0",
    description="Vocabulary filtering of ARPA language models",
    license="MIT",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"arpafilter": ["py.typed"]},
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.7",
    install_requires=[],
    extras_require={"test": ["pytest"]},
)
