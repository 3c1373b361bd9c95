from setuptools import find_packages, setup

setup(
    name="code-launcher",
    version="0.1.0",
    description="Find and open recent VS Code projects and SSH hosts from the command line",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cachetools>=5.0.0",
    ],
    entry_points={
        "console_scripts": [
            "code-launcher=code_launcher.__main__:main",
        ],
    },
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "pytest",
            "build",
            "twine",
        ],
    },
)
