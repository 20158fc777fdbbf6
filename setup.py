import setuptools

try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Build game-server resources from manifest.yaml"

setuptools.setup(
    name="fxpack",
    version="0.1.0",
    description="Build game-server resources from manifest.yaml",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", include=["fxpack", "fxpack.*"]),
    install_requires=[
        "pydantic>=2.6.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
        "rich>=13.0.0",
        "typer>=0.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "fxpack=fxpack.cli.main:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
