[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solidsnake"
version = "0.1.0"
description = "Indentation preprocessor, lexer, token stream and bytecode argument codec for a small register-VM language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "preprocessor", "bytecode", "virtual-machine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["solidsnake"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
