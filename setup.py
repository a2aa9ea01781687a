"""Setup script for the greenfleet package."""

from setuptools import find_packages, setup

setup(
    name="greenfleet",
    version="0.1.0",
    description="Decision and production engine for wind, solar and hydropower units",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pymysql",
        "pyyaml",
        "python-dotenv",
        "paho-mqtt>=2.0.0",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "greenfleet-coordinator=greenfleet.coordinator:main",
        ],
    },
)
