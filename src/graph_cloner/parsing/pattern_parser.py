"""Compiler from path patterns to traversal plans.

Grammar, loosest binding first::

    a|b     alternation: both branches from the same nodes
    a.b     concatenation: b from the nodes reached by a
    a+      one or more repetitions of a
    (a)*    zero or more repetitions of a
    a$      explore a, then end the path
    (...)   grouping
    name    relation name; may contain the globs * and ?

Parentheses do not open nested parse frames. Each one shifts the priority of
the tokens inside it by ``PAREN_PRIORITY``, and the weakest token of a token
run is always the leftmost one with the lowest priority.
"""

from __future__ import annotations

import logging

import ply.lex as lex

from graph_cloner.errors import PatternSyntaxError
from graph_cloner.parsing.pattern_lexer import PatternLexer
from graph_cloner.traversal.types import (
    Dot,
    ExplorerNode,
    Literal,
    Or,
    Plus,
    Star,
    Terminator,
    Wildcard,
)

logger = logging.getLogger(__name__)

# Added per enclosing pair of parentheses; larger than any base priority.
PAREN_PRIORITY = 10

BASE_PRIORITY = {
    "PIPE": 1,
    "DOT": 2,
    "PLUS": 3,
    "STAR": 3,
    "DOLLAR": 3,
    "NAME": 9,
}

_INFIX = {"DOT": Dot, "PIPE": Or}
_POSTFIX = {"PLUS": Plus, "STAR": Star, "DOLLAR": Terminator}


class PatternCompiler:
    """Compiles path patterns and caches the result by pattern text.

    A compiler may be shared between threads: tokenizing works on a private
    lexer clone and the cache is insert-if-absent.
    """

    def __init__(self) -> None:
        self._lexer = PatternLexer()
        self._cache: dict[str, ExplorerNode] = {}

    def compile(self, pattern: str) -> ExplorerNode:
        explorer = self._cache.get(pattern)
        if explorer is not None:
            return explorer
        tokens, priorities = self._prioritize(pattern)
        explorer = self._build(pattern, tokens, priorities)
        logger.debug("compiled pattern %r: %r", pattern, explorer)
        return self._cache.setdefault(pattern, explorer)

    def is_cached(self, pattern: str) -> bool:
        return pattern in self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    # ---- Priorities ----

    def _prioritize(self, pattern: str) -> tuple[list[lex.LexToken], list[int]]:
        """Drop parentheses, folding them into the priority of each token."""
        try:
            raw_tokens = self._lexer.tokenize(pattern)
        except PatternSyntaxError as exc:
            raise PatternSyntaxError(f"Pattern {pattern!r}: {exc}") from None
        tokens: list[lex.LexToken] = []
        priorities: list[int] = []
        offset = 0
        for tok in raw_tokens:
            if tok.type == "LPAREN":
                offset += PAREN_PRIORITY
                continue
            if tok.type == "RPAREN":
                offset -= PAREN_PRIORITY
                if offset < 0:
                    raise PatternSyntaxError(
                        f"Pattern {pattern!r}: unbalanced ')' at position {tok.lexpos}"
                    )
                continue
            tokens.append(tok)
            priorities.append(offset + BASE_PRIORITY[tok.type])
        if offset != 0:
            raise PatternSyntaxError(f"Pattern {pattern!r}: unbalanced parentheses")
        return tokens, priorities

    # ---- Tree building ----

    def _build(
        self, pattern: str, tokens: list[lex.LexToken], priorities: list[int]
    ) -> ExplorerNode:
        if not tokens:
            raise PatternSyntaxError(f"Pattern {pattern!r}: empty pattern or group")
        # min() keeps the first of equal candidates, i.e. the leftmost token
        idx = min(range(len(priorities)), key=priorities.__getitem__)
        tok = tokens[idx]

        if tok.type == "NAME":
            if len(tokens) != 1:
                raise PatternSyntaxError(
                    f"Pattern {pattern!r}: missing operator near {tok.value!r}"
                )
            if "*" in tok.value or "?" in tok.value:
                return Wildcard(tok.value)
            return Literal(tok.value)

        if tok.type in _INFIX:
            left = self._build(pattern, tokens[:idx], priorities[:idx])
            right = self._build(pattern, tokens[idx + 1:], priorities[idx + 1:])
            return _INFIX[tok.type](left, right)

        if idx != len(tokens) - 1:
            raise PatternSyntaxError(
                f"Pattern {pattern!r}: postfix operator {tok.value!r} must be the "
                f"last token of its group (position {tok.lexpos})"
            )
        child = self._build(pattern, tokens[:idx], priorities[:idx])
        return _POSTFIX[tok.type](child)


default_compiler = PatternCompiler()


def compile_pattern(pattern: str) -> ExplorerNode:
    """Compile ``pattern`` with the shared default compiler."""
    return default_compiler.compile(pattern)
