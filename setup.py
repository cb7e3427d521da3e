from setuptools import setup, find_packages

setup(
    name="instruction-parser",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "python-dotenv==1.0.1",
        "requests==2.31.0",
        "solders==0.19.0",
        "base58==2.1.1",
        "construct==2.10.70",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "instruction-parser=instruction_parser.cli:main",
        ],
    },
)
