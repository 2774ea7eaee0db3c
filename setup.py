"""Setup script for ai-note-tagger package."""

from setuptools import setup, find_packages

setup(
    name="ai-note-tagger",
    version="0.1.0",
    description="Automatic tagging of Markdown notes using LLM-based suggestions",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pandas>=2.0",
        "requests",
        "python-dotenv",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "note-tagger=note_tagger.cli:main",
        ],
    },
)
