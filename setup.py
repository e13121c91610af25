# setup.py
from setuptools import setup, find_packages

setup(
    name="wavefront3d",
    version="1.0.0",
    description="Wavefront OBJ / MTL loader producing numpy buffers",
    packages=find_packages(include=["wavefront3d", "wavefront3d.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["wavefront3d=wavefront3d.__main__:main"],
    },
)
