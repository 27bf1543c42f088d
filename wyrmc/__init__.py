"""Wyrm language toolkit: lexer, parser, semantic checks, bytecode generation, disassembler and VM."""

__version__ = "0.1.0"