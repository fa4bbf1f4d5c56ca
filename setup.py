from setuptools import setup, find_packages

setup(
    name="connectn",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "connectn": ["assets/*"],
        "connectn.interfaces": ["templates/*.html"],
    },
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "flask",  # Web interface
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
