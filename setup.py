from setuptools import setup, find_packages

setup(
    name="wfc-sudoku",
    version="1.0.0",
    description="Sudoku solver based on wave function collapse with snapshot backtracking",
    author="robomotic",
    packages=find_packages(include=["wfc_sudoku", "wfc_sudoku.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "seaborn>=0.11.0",
        "pandas>=1.3.0",
        "pillow>=9.0.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "wfc-sudoku=wfc_sudoku.cli:main",
        ],
    },
)
