"""
SCIM Filter Parser - RFC 7644 Compliant

Recursive-descent parser for the filter grammar of RFC 7644 Section 3.4.2.2:

    filter    := orExpr
    orExpr    := andExpr ("or" andExpr)*
    andExpr   := primary ("and" primary)*
    primary   := "not" "(" filter ")" | "(" filter ")" | attrExpr
    attrExpr  := ATTR "[" filter "]" | ATTR "pr" | ATTR OP compValue
    compValue := STRING | NUMBER | BOOLEAN | NULL

AND binds tighter than OR; both are left-associative.
"""

from typing import List

from scimfilter.exceptions import InvalidFilterSyntax
from scimfilter.filters.ast import (
    CompValue, CompareNode, FilterNode, LogicalNode, NotNode, ValuePathNode,
)
from scimfilter.filters.tokenizer import Token, TokenType, tokenize
from scimfilter.utils.logging import get_logger


logger = get_logger(__name__)


class SCIMFilterParser:
    """Parser turning a token stream into a filter AST"""

    def __init__(self, tokens: List[Token], text: str = ''):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise InvalidFilterSyntax(text, 'Token stream must end with an EOF token')
        self.tokens = tokens
        self.text = text
        self.pos = 0

    def parse(self) -> FilterNode:
        node = self._parse_or()
        token = self._current()
        if token.type != TokenType.EOF:
            self._fail(f'Unexpected token "{token.value}" at position {token.position}', token)
        return node

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        # EOF is never consumed so _current() stays valid
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        token = self._current()
        if token.type != token_type:
            self._fail(
                f'Expected {token_type.value} but got {token.type.value} ("{token.value}") '
                f'at position {token.position}',
                token,
            )
        return self._advance()

    def _fail(self, reason: str, token: Token):
        raise InvalidFilterSyntax(self.text, reason, token.position)

    def _parse_or(self) -> FilterNode:
        left = self._parse_and()
        while self._current().type == TokenType.OR:
            self._advance()
            right = self._parse_and()
            left = LogicalNode(op='or', left=left, right=right)
        return left

    def _parse_and(self) -> FilterNode:
        left = self._parse_primary()
        while self._current().type == TokenType.AND:
            self._advance()
            right = self._parse_primary()
            left = LogicalNode(op='and', left=left, right=right)
        return left

    def _parse_primary(self) -> FilterNode:
        token = self._current()

        if token.type == TokenType.NOT:
            self._advance()
            self._expect(TokenType.LPAREN)
            inner = self._parse_or()
            self._expect(TokenType.RPAREN)
            return NotNode(filter=inner)

        if token.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_or()
            self._expect(TokenType.RPAREN)
            return inner

        return self._parse_attr_expr()

    def _parse_attr_expr(self) -> FilterNode:
        attr_path = self._expect(TokenType.ATTR).value

        if self._current().type == TokenType.LBRACKET:
            self._advance()
            inner = self._parse_or()
            self._expect(TokenType.RBRACKET)
            return ValuePathNode(attr_path=attr_path, filter=inner)

        if self._current().type == TokenType.PR:
            self._advance()
            return CompareNode(attr_path=attr_path, op='pr')

        op = self._expect(TokenType.OP).value
        return CompareNode(attr_path=attr_path, op=op, value=self._parse_comp_value())

    def _parse_comp_value(self) -> CompValue:
        token = self._current()
        if token.type == TokenType.STRING:
            self._advance()
            return token.value
        if token.type == TokenType.NUMBER:
            self._advance()
            return float(token.value) if '.' in token.value else int(token.value)
        if token.type == TokenType.BOOLEAN:
            self._advance()
            return token.value == 'true'
        if token.type == TokenType.NULL:
            self._advance()
            return None
        self._fail(
            f'Expected comparison value but got {token.type.value} ("{token.value}") '
            f'at position {token.position}',
            token,
        )


def parse(tokens: List[Token], text: str = '') -> FilterNode:
    """Parse a token stream produced by ``tokenize`` into a filter AST."""
    return SCIMFilterParser(tokens, text).parse()


def parse_scim_filter(filter_string: str) -> FilterNode:
    """
    Parse a SCIM filter string into an AST.

    Examples:
        'userName eq "john"'
        'name.familyName co "doe" and active eq true'
        'emails[type eq "work" and value co "@example.com"]'
        'not (active eq false)'

    Raises:
        InvalidFilterSyntax: If the filter is empty or malformed
    """
    if not filter_string or not filter_string.strip():
        raise InvalidFilterSyntax(filter_string or '', "Filter expression cannot be empty")

    text = filter_string.strip()
    try:
        return parse(tokenize(text), text)
    except InvalidFilterSyntax as e:
        logger.debug(f"Rejected SCIM filter '{text}': {e.reason}")
        raise
