from setuptools import setup, find_packages

setup(
    name="dkeys",
    version="0.1.0",
    description="dkeys — word suggestions and grammar-correction patching for an on-screen keyboard",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests",
        "pyspellchecker",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dkeys=dkeys.main:main",
        ],
    },
)
