import os
from setuptools import setup, find_packages

# locate files relative to this setup.py
HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="ngtraverse",
    version="0.1.0",
    description="Declaration metadata extraction for Angular/TypeScript sources using Tree-sitter",
    long_description=open(os.path.join(HERE, "README.md"), encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ngtraverse", "ngtraverse.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=parse_requirements("ngtraverse/requirements.txt"),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ngtraverse=ngtraverse.main:main",
        ],
    },
    package_data={"ngtraverse": ["requirements.txt"]},
    include_package_data=True,
)
