"""Parsing module for path patterns."""

from graph_cloner.parsing.pattern_lexer import PatternLexer
from graph_cloner.parsing.pattern_parser import (
    PatternCompiler,
    compile_pattern,
    default_compiler,
)

__all__ = [
    "PatternCompiler",
    "PatternLexer",
    "compile_pattern",
    "default_compiler",
]
