"""
Setup script for tag-service project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="tag-service",
    version="0.1.0",
    packages=find_packages(include=["tag_service", "tag_service.*", "frontend", "frontend.*"]),
    package_data={
        "frontend": ["templates/*.html"],
        "tag_service": ["fonts/*.ttf"],
    },
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.100",
        "uvicorn>=0.23",
        "pydantic>=2.5",
        "pydantic-settings>=2.0",
        "reportlab>=4.0",
        "python-barcode>=0.15",
        "Pillow>=10.0",
        "pypdf>=4.0",
        "flask>=3.0",
        "requests>=2.31",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.25",
        ],
    },
)
