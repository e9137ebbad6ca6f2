"""
MiniLang - Lexer
Tokenizes MiniLang source code into a flat token stream.
"""

import re
from dataclasses import dataclass
from typing import List, Optional
from enum import Enum, auto

from .diagnostics import Diagnostics, default_diagnostics


class TokenType(Enum):
    # Literals
    IDENTIFIER = auto()
    NUMBER     = auto()
    # Arithmetic
    PLUS       = auto()   # +
    MINUS      = auto()   # -
    MULTIPLY   = auto()   # *
    DIVIDE     = auto()   # /
    ASSIGN     = auto()   # =  (also ==)
    # Brackets
    LPAREN     = auto()   # (
    RPAREN     = auto()   # )
    LBRACE     = auto()   # {
    RBRACE     = auto()   # }
    # Keywords
    IF         = auto()
    ELSE       = auto()
    WHILE      = auto()
    PRINT      = auto()
    # Comparisons
    GEQ        = auto()   # >= (also >)
    LEQ        = auto()   # <= (also <)
    # Sentinel
    EOF        = auto()


KEYWORDS = {
    "if":    TokenType.IF,
    "else":  TokenType.ELSE,
    "while": TokenType.WHILE,
    "print": TokenType.PRINT,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""
    line: int = 1

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, line={self.line})"


# Longest spellings first: '>=' must win over '>', '==' over '='
_PUNCTUATION = [
    (">=", TokenType.GEQ),
    ("<=", TokenType.LEQ),
    ("==", TokenType.ASSIGN),
    (">",  TokenType.GEQ),
    ("<",  TokenType.LEQ),
    ("=",  TokenType.ASSIGN),
    ("+",  TokenType.PLUS),
    ("-",  TokenType.MINUS),
    ("*",  TokenType.MULTIPLY),
    ("/",  TokenType.DIVIDE),
    ("(",  TokenType.LPAREN),
    (")",  TokenType.RPAREN),
    ("{",  TokenType.LBRACE),
    ("}",  TokenType.RBRACE),
]
_PUNCT_TYPES = dict(_PUNCTUATION)

_WHITESPACE_RE = re.compile(r'[ \t\r\f\v]+')
_NEWLINE_RE    = re.compile(r'\n')
_WORD_RE       = re.compile(r'[A-Za-z][A-Za-z0-9_]*', re.ASCII)
_NUMBER_RE     = re.compile(r'[0-9]+', re.ASCII)
_PUNCT_RE      = re.compile('|'.join(re.escape(p) for p, _ in _PUNCTUATION))


def tokenize(source: str, diagnostics: Optional[Diagnostics] = None) -> List[Token]:
    """
    Convert MiniLang source string into a list of Tokens ending with EOF.
    Never raises: unknown characters are reported to *diagnostics* and skipped.
    """
    diagnostics = default_diagnostics(diagnostics)
    tokens: List[Token] = []
    line = 1
    pos = 0
    length = len(source)

    while pos < length:
        m = _WHITESPACE_RE.match(source, pos)
        if m:
            pos = m.end()
            continue

        m = _NEWLINE_RE.match(source, pos)
        if m:
            line += 1
            pos = m.end()
            continue

        m = _WORD_RE.match(source, pos)
        if m:
            word = m.group(0)
            if word in KEYWORDS:
                tokens.append(Token(KEYWORDS[word], "", line))
            else:
                tokens.append(Token(TokenType.IDENTIFIER, word, line))
            pos = m.end()
            continue

        m = _NUMBER_RE.match(source, pos)
        if m:
            tokens.append(Token(TokenType.NUMBER, m.group(0), line))
            pos = m.end()
            continue

        m = _PUNCT_RE.match(source, pos)
        if m:
            tokens.append(Token(_PUNCT_TYPES[m.group(0)], "", line))
            pos = m.end()
            continue

        diagnostics.report("Lexer", f"Unknown character: {source[pos]!r}", line)
        pos += 1

    tokens.append(Token(TokenType.EOF, "", line))
    return tokens


def format_tokens(tokens: List[Token]) -> str:
    """One line per token, for debugging dumps."""
    return "\n".join(f"Token({t.type.name}, {t.value!r})" for t in tokens)
