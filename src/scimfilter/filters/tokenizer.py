"""
SCIM filter tokenizer

Turns an RFC 7644 filter string into a flat list of tokens terminated by an
EOF token. Keywords and operator names are matched case-insensitively;
attribute paths keep their original casing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from scimfilter.exceptions import InvalidFilterSyntax
from scimfilter.filters.ast import COMPARE_OPS


class TokenType(str, Enum):
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    OP = "OP"
    PR = "PR"
    STRING = "STRING"
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ATTR = "ATTR"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: int


PUNCTUATION = {
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
}

KEYWORDS = {
    'and': TokenType.AND,
    'or': TokenType.OR,
    'not': TokenType.NOT,
    'pr': TokenType.PR,
    'true': TokenType.BOOLEAN,
    'false': TokenType.BOOLEAN,
    'null': TokenType.NULL,
}

# Characters allowed to follow a numeric literal
NUMBER_TERMINATORS = frozenset('()[]')


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_ident_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch in '_:')


def _is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in '_.:-')


def _scan_number(text: str, start: int) -> int:
    """Return the end offset of a numeric literal at ``start``, or ``start`` if there is none."""
    i = start
    if i < len(text) and text[i] == '-':
        i += 1
    digits_start = i
    while i < len(text) and _is_digit(text[i]):
        i += 1
    if i == digits_start:
        return start
    if i + 1 < len(text) and text[i] == '.' and _is_digit(text[i + 1]):
        i += 1
        while i < len(text) and _is_digit(text[i]):
            i += 1
    if i < len(text) and not (text[i].isspace() or text[i] in NUMBER_TERMINATORS):
        return start
    return i


def tokenize(text: str) -> List[Token]:
    """
    Tokenize a SCIM filter string.

    Args:
        text: Filter expression, e.g. 'emails[type eq "work"] and active eq true'

    Returns:
        Tokens in input order, always terminated by an EOF token

    Raises:
        InvalidFilterSyntax: On an unterminated string or an unexpected character
    """
    tokens: List[Token] = []
    i = 0

    while i < len(text):
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        position = i

        if ch in PUNCTUATION:
            tokens.append(Token(PUNCTUATION[ch], ch, position))
            i += 1
            continue

        # Quoted string; a backslash escapes the next character verbatim
        if ch == '"':
            i += 1
            chars = []
            while i < len(text) and text[i] != '"':
                if text[i] == '\\' and i + 1 < len(text):
                    chars.append(text[i + 1])
                    i += 2
                else:
                    chars.append(text[i])
                    i += 1
            if i >= len(text):
                raise InvalidFilterSyntax(text, f"Unterminated string at position {position}", position)
            i += 1
            tokens.append(Token(TokenType.STRING, ''.join(chars), position))
            continue

        if _is_digit(ch) or ch == '-':
            end = _scan_number(text, i)
            if end > i:
                tokens.append(Token(TokenType.NUMBER, text[i:end], position))
                i = end
                continue

        if _is_ident_start(ch):
            while i < len(text) and _is_ident_char(text[i]):
                i += 1
            ident = text[position:i]
            lower = ident.lower()

            if lower in KEYWORDS:
                tokens.append(Token(KEYWORDS[lower], lower, position))
            elif lower in COMPARE_OPS:
                tokens.append(Token(TokenType.OP, lower, position))
            else:
                tokens.append(Token(TokenType.ATTR, ident, position))
            continue

        raise InvalidFilterSyntax(text, f"Unexpected character '{ch}' at position {position}", position)

    tokens.append(Token(TokenType.EOF, '', len(text)))
    return tokens
