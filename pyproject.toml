[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "calcir"
version = "0.1.0"
description = "A small expression compiler that turns arithmetic with declared variables into textual LLVM IR"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "calculator", "llvm", "ir", "lexer", "parser"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Environment :: Console",
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
calcir = "calcir.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["calcir"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
