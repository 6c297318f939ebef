from setuptools import setup, find_packages

setup(
    name="webqa_testgen",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "playwright==1.52.0",
        "pydantic>=2",
        "python-dotenv",
        "pyyaml",
        "beautifulsoup4",
        "jinja2"
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["webqa-testgen=webqa_testgen.cli:main"],
    },
    python_requires='>=3.10',
)
