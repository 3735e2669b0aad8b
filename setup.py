from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nbsync",
    version="0.1.0",
    description="Keep Jupyter notebooks and their hidden .nb/ script twins in sync",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nbsync", "nbsync.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "nbsync=nbsync.cli:main",
        ],
    },
    install_requires=[
        "toml>=0.10.0",
        "pyfiglet>=0.8.0",
        "jupytext>=1.14",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
