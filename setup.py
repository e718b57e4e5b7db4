"""
qlthemes - Syntax highlight themes for Quick Look previews.
"""

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text() if readme.exists() else ""

setup(
    name="qlthemes",
    version="0.1.0",
    description="Render syntax highlight themes to CSS, HTML, thumbnails and .theme files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["qlthemes", "qlthemes.*"]),
    include_package_data=True,
    package_data={
        "qlthemes.theme": ["themes/*.yaml"],
    },
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.4.0",
        "PyYAML>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-qt>=4.3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "qlthemes-cli=qlthemes.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    keywords="syntax highlight theme css quicklook pyqt6",
)
