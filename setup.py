# setup.py
from setuptools import setup, find_packages

setup(
    name="threshold-logic",
    version="0.1.0",
    description="Threshold logic function identification via unateness analysis and ILP",
    package_dir={"": "src"},
    packages=find_packages(where="src"),        # automatically finds your modules
    install_requires=[
        "numpy>=1.23",
        "pandas>=2.0",
        "pulp>=2.7,<4",
        "scipy>=1.9",      # scipy.optimize.milp
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "threshold-id=threshold_logic.cli:main",
        ],
    },
    python_requires=">=3.8",
    include_package_data=True,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
