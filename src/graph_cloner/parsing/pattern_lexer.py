"""Lexer for path patterns (e.g. ``company.department+.(boss|employees)``)."""

import ply.lex as lex

from graph_cloner.errors import PatternSyntaxError


class PatternLexer:
    """Lexer for tokenizing path patterns.

    Operators are single characters; everything else up to the next operator
    or whitespace is one NAME token, which may contain the glob glyphs
    ``*`` and ``?``. A NAME consisting of a lone ``*`` directly after ``)`` is
    re-tagged as the STAR (zero or more) postfix operator by ``tokenize``.
    """

    tokens = [
        "NAME",
        "DOT",
        "PIPE",
        "PLUS",
        "DOLLAR",
        "LPAREN",
        "RPAREN",
    ]

    t_DOT = r"\."
    t_PIPE = r"\|"
    t_PLUS = r"\+"
    t_DOLLAR = r"\$"
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_NAME = r"[^\s.|+$()]+"
    t_ignore = " \t\r\n\f\v"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_error(self, t: lex.LexToken) -> None:
        raise PatternSyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        kwargs.setdefault("errorlog", lex.NullLogger())
        self.lexer = lex.lex(module=self, **kwargs)

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize ``data`` on a private clone of the built lexer."""
        if self.lexer is None:
            self.build()
        lexer = self.lexer.clone()
        lexer.input(data)
        tokens: list[lex.LexToken] = []
        while True:
            tok = lexer.token()
            if tok is None:
                break
            if tok.type == "NAME" and tok.value == "*" and tokens and tokens[-1].type == "RPAREN":
                tok.type = "STAR"
            tokens.append(tok)
        return tokens
