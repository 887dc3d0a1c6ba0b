from setuptools import setup, find_packages

setup(
    name="netball-stats",
    version="0.1.0",
    description="Position-based statistics reconstruction and quarter score projection for netball teams",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
