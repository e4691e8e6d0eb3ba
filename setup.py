from setuptools import setup, find_packages

# Read the README file for a long description.
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read core requirements from requirements.txt
with open('requirements.txt') as f:
    install_requires = [line for line in f.read().splitlines() if line and not line.startswith('#')]

# Define development dependencies
extras_require = {
    'dev': [
        'pytest>=6.0',
        'flake8',
        'black',
        'mypy',
        'setuptools',
        'wheel',
        'twine'
    ],
    'test': [
        'pytest>=6.0',
    ],
}

setup(
    name="TagConf",
    version="0.1.0",
    description="Tag-aware configuration aggregation with typed value conversion.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["tagconf", "tagconf.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
