"""Indentation preprocessor, lexer, token stream, bytecode argument codec and VM error types."""

__version__ = "0.1.0"