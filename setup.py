from setuptools import find_packages, setup

setup(
    name="hookable",
    version="0.1.0",
    description="Named hook registration with serial and parallel async dispatch",
    packages=find_packages(include=["hookable", "hookable.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=["pydantic>=2", "PyYAML"],
    extras_require={"test": ["pytest"]},
)
