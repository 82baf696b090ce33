[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tomic"
version = "0.1.0"
description = "Compiler back-end pieces: diagnostics loggers, symbol table entries and an LLVM IR model with textual assembly printers."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "llvm", "ir", "symbol-table", "diagnostics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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

[tool.hatch.build.targets.wheel]
packages = ["tomic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
