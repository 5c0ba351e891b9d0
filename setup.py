# setup.py
from setuptools import setup, find_packages

setup(
    name="rotalog",
    version="0.1.0",
    description="Leveled logging to a console stream or a size-rotated file with bounded retention",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'rotalog=rotalog.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
