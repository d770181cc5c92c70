import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="db_types_flatten",
    version="0.1.0",
    description="Flatten the nested Database type of generated database typings into standalone type declarations",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Text Processing",
        "Intended Audience :: Developers",
    ],
    keywords="typescript database types code generation supabase postgres",
    license="MIT",
    packages=find_packages(),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "jinja2>=3.0.0",
        "pydantic>=2.0.0",
        "tree-sitter>=0.23.0",
        "tree-sitter-typescript>=0.23.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "db_types_flatten=db_types_flatten.db_types_flatten:db_types_flatten",
        ],
    },
    include_package_data=True,
    package_data={
        "db_types_flatten": ["templates/**/*.jinja2", "templates/*/*.jinja2"],
    },
    zip_safe=False,
)
