from setuptools import setup, find_packages

setup(
    name="minilang",
    version="0.1.0",
    description="MiniLang v0.1 — a tiny imperative integer language interpreter",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="MiniLang Project",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "minilang=minilang.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Interpreters",
    ],
)
