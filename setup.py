"""
NuGet Installer package setup.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="nuget-installer",
    version="0.1.0",
    description="Install NuGet package metadata declared in a Cargo manifest",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nuget_installer", "nuget_installer.*"], exclude=["nuget_installer.tests", "nuget_installer.tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "nuget=nuget_installer.cli.install_cli:main",
        ],
    },
)
