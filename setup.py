# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="complog",
    version="0.1.0",
    description="Hierarchical component logging from declarative config, with call tracing",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["complog", "complog.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'complog=complog.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
