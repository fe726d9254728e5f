# setup.py
from setuptools import setup, find_packages

setup(
    name="conslisp",
    version="0.1.0",
    description="A small cons-cell Lisp interpreter with a tree-walking evaluator",
    packages=find_packages(include=["conslisp", "conslisp.*", "conslisp_lsp", "conslisp_lsp.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "conslisp=conslisp.repl:main",
            "conslisp-ls=conslisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
