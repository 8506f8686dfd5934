import os
from setuptools import setup


src_version = os.path.join(os.path.dirname(__file__), "aocapi", "version.py")
with open(src_version) as f:
    version = f.read().strip().split()[-1][1:-1]


setup(
    name="aoc-api",
    version=version,
    description="Fetch, cache and submit your Advent of Code puzzles",
    long_description=open("README.rst").read(),
    long_description_content_type="text/x-rst",
    packages=["aocapi"],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "aocapi=aocapi.cli:main",
        ],
    },
    license="MIT",
    classifiers=[
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Software Development :: Libraries",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    install_requires=[
        "urllib3>=2",
        "beautifulsoup4",
        'tzdata; platform_system == "Windows"',
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "pytest-raisin",
            "pytest-freezer",
            "pook",
        ],
    },
)
