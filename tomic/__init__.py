"""Compiler back-end pieces: diagnostics loggers, symbol table entries and an LLVM IR model."""

__version__ = "0.1.0"