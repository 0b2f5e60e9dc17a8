from setuptools import setup, find_packages

setup(
    name="valuebet",
    version="0.1.0",
    description="Poisson team-form model for finding value in DNB and Asian +0.5 odds",
    author="Andy Cheng",
    packages=find_packages(exclude=["tests", "examples"]),
    package_data={"valuebet": ["data/*.json"]},
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "scipy>=1.10.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "valuebet=valuebet.cli:main",
        ],
    },
)
