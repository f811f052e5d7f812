from setuptools import find_packages, setup

setup(
    name="cloudant-client",
    version="0.1.0",
    description="A small client for the Cloudant / CouchDB document database HTTP API.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "requests>=2.27",
        "pydantic>=2.0",
        "pyyaml>=5.4.1",
        "typer>=0.9",
    ],
    extras_require={
        "dev": [
            "flake8",
            "black",
            "pre-commit",
            "pre-commit-hooks",
            "isort",
            "pytest",
            "pytest-mock",
        ],
        "test": ["flake8", "pytest", "pytest-mock"],
    },
    entry_points={
        "console_scripts": ["cloudant=cloudant_client.cli:cli"],
    },
)
