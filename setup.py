# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="compiledb-tree",
    version="0.1.0",
    description="Directory-tree explorer for compile_commands.json build databases",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["compiledb_tree", "compiledb_tree.*"]),
    python_requires=">=3.9",
    install_requires=[
        "watchdog>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'compiledb-tree=compiledb_tree.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
