from setuptools import setup, find_packages

setup(
    name="pr-opener",
    version="1.0.0",
    description="Find open GitHub pull requests by a set of authors and open them in a browser",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "rich>=13.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pr-opener=pr_opener.cli:main",
        ],
    },
)
