#!/usr/bin/env python3
"""
Setup configuration for Bookmark Manager
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="bookmark-manager",
    version="1.0.0",
    author="",
    author_email="",
    description="Command-line tool that keeps a small list of named offsets in a YAML file",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["bookmark_manager", "bookmark_manager.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "bookmark-manager=bookmark_manager.main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
