"""
Setup script for formcraft-engine.

formcraft is the question type engine behind a multi-type form builder.
It covers the parts of the product that carry real domain logic:

1. Question Types - mcq, mca, categorize, cloze, comprehension, image
2. Validation - config checks at save/publish, answer checks at submission
3. Scoring - partial-credit grading for categorize, cloze and comprehension

The 'formcraft' command validates form documents and grades submissions
from the terminal.
"""

from setuptools import find_packages, setup

setup(
    name="formcraft-engine",
    version="1.0.0",
    description="Question type engine for multi-type forms: validation and scoring",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="formcraft",
    packages=find_packages(include=["formcraft", "formcraft.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.6.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "formcraft=formcraft.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Testing",
    ],
    keywords="forms questionnaire quiz cloze scoring validation",
)
