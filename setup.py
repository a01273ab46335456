from setuptools import find_packages, setup

setup(
    name="fibonacci_spiral",
    version="0.0.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "svgwrite",
        "loguru",
        "flask>=2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
