# setup.py
from setuptools import setup, find_packages

setup(
    name="expense-tracker",
    version="0.1.0",
    description="A line-oriented CLI for keeping a personal expense log in a plain TSV file",
    author="Your Name",
    author_email="you@example.com",
    url="https://github.com/yourusername/expense-tracker",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
        "XlsxWriter>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "expense-tracker=expense_tracker.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
