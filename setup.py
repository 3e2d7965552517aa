from setuptools import setup

from fsio.version import __version__

setup(
    name="firestore-io",
    version=__version__,
    description="Export Firestore collections (with subcollections) to JSON and import them back",
    license="Apache License, Version 2.0",
    url="",
    packages=['fsio'],
    python_requires=">=3.8",
    install_requires=[
        "google-cloud-firestore>=2.11",
        "google-auth",
        "google-api-core",
        "typer",
    ],
    extras_require={
        "test": ["pytest", "pytest-mock"],
    },
    entry_points={
        "console_scripts": ["firestore-io=fsio.cli:main"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9"
    ],
    keywords="firestore export import json"
)
