"""setuptools setup for FitFlow.

Install for development:
    pip install -e ".[test]"
    python -m fitflow list
"""

from setuptools import find_packages, setup

setup(
    name="fitflow",
    version="0.1.0",
    description="Timed multi-step workout session engine",
    packages=find_packages(include=["fitflow", "fitflow.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "SQLAlchemy>=2.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["fitflow=fitflow.__main__:main"],
    },
)
