# setup.py
from setuptools import setup, find_packages

setup(
    name="mica",
    version="0.3.0",
    description="A small self-hosted Lisp interpreter with persistent lexical environments",
    python_requires=">=3.10",
    packages=find_packages(include=["mica", "mica.*"]),
    package_data={"mica": ["prelude/*.lisp"]},
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mica=mica.__main__:main"],
    },
    zip_safe=False,
)
