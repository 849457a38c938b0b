"""Setup script for the powerd6 infrastructure stack."""
from setuptools import setup, find_packages

setup(
    name="powerd6-infrastructure",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["cli"],
    install_requires=[
        "pulumi>=3.80,<4",
        "pulumi-github>=6,<7",
        "pydantic>=2",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["powerd6-infra=cli:main"],
    },
    python_requires=">=3.10",
)
