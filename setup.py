from setuptools import setup, find_packages

setup(
    name="pathtracker",
    version="0.1.0",
    description="Session-based GPS path tracking backend with path simplification and statistics",
    author="",
    python_requires=">=3.9",
    packages=find_packages(include=["pathtracker", "pathtracker.*"]),
    install_requires=[
        "aiohttp>=3.9.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "rich>=12.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pathtracker=pathtracker.main:main",
        ],
    },
)
