from setuptools import setup, find_packages

setup(
    name="tc-neo4j",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "click>=8.0",
        "python-dotenv>=1.0",
        "jinja2>=3.0",
        "testcontainers>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "docker>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tc-neo4j=tcneo4j.CLI.main:main",
        ],
    },
)
