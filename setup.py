"""Setup script for FireSight"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="firesight",
    version="0.1.0",
    description="Code heat scoring from version-control history for heatmap dashboards",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Version Control :: Git",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.20.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "serve": [
            "starlette>=0.27.0",
            "uvicorn>=0.23.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
            "starlette>=0.27.0",
            "uvicorn>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "firesight=firesight.cli:app",
        ],
    },
    keywords="git churn code-heat heatmap hotspots version-control",
)
