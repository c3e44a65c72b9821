"""Compile small arithmetic expressions with declared variables to textual LLVM IR."""

__version__ = "0.1.0"