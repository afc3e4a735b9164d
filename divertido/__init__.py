"""Lexer, parser and tree-walking interpreter for the Divertido scripting language."""
