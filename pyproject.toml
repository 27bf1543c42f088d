[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wyrmc"
version = "0.1.0"
description = "Lexer, parser, type checker, bytecode generator and stack VM for the Wyrm language"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "compiler",
    "lexer",
    "parser",
    "type-checker",
    "bytecode",
    "virtual-machine",
    "wyrm",
]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
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

[project.scripts]
wyrmc-runner = "wyrmc.runner:main"

[tool.hatch.build.targets.wheel]
packages = ["wyrmc"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
