"""Setup script for lot_matcher package."""

from setuptools import setup, find_packages

setup(
    name="lot_matcher",
    version="1.0.0",
    description="Vendor/inhouse lot label verification from OCR text",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pillow>=9.0.0",
        "openai>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "lot-matcher=lot_matcher.cli:main",
        ],
    },
)
