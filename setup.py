"""
Setup script for the TalentHub listing project.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="talenthub-listings",
    version="1.2.0",
    packages=find_packages(include=["src", "src.*", "api_service", "api_service.*", "frontend", "frontend.*"]),
    py_modules=["version"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "pymongo>=4.6",
        "python-dotenv>=1.0",
        "flask>=3.0",
        "requests>=2.31",
        "httpx>=0.26",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-mock>=3.12",
            "pytest-asyncio>=0.23",
        ],
    },
)
