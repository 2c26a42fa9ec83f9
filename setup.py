# setup.py
"""Setup script for FlowForge Generator."""

from setuptools import setup, find_packages

setup(
    name="flowforge-generator",
    version="1.0.0",
    description="Process graph validation and .NET project generation from BPMN workflows",
    packages=find_packages(include=["core", "core.*", "cli", "cli.*"]),
    include_package_data=True,
    package_data={"core.generator": ["templates/*.j2"]},
    install_requires=[
        "click>=8.0",
        "pyyaml>=6.0",
        "pydantic>=2.6",
        "pydantic-settings>=2.0",
        "jinja2>=3.1",
        "structlog>=23.1",
        "lxml>=4.9",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "black>=23.0",
            "flake8>=6.0",
        ],
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "flowforge=cli.main:cli",
            "ff=cli.main:cli",
        ],
    },
    python_requires=">=3.8",
)
