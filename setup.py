from setuptools import setup, find_packages

setup(
    name="hprof",
    version="0.1.0",
    description="Real-time hierarchical frame profiler",
    author="Dmitri Manajev",
    author_email="dmitri.manajev@protonmail.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["demo"],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "torch>=2.0.0",
        "tensorboard>=2.14.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-mock>=3.10",
        ],
    },
)
