"""
Tests for the SCIM filter parser (RFC 7644 Section 3.4.2.2).
"""
import pytest
from scimfilter.exceptions import InvalidFilterSyntax
from scimfilter.filters import (
    CompareNode, LogicalNode, NotNode, ValuePathNode, parse, parse_scim_filter, tokenize,
)


class TestParser:
    """Test cases for filter parsing."""

    def test_simple_equality(self):
        ast = parse_scim_filter('userName eq "john"')

        assert ast == CompareNode(attr_path="userName", op="eq", value="john")
        assert ast.to_dict() == {"type": "compare", "attrPath": "userName", "op": "eq", "value": "john"}

    def test_presence_has_no_value(self):
        ast = parse_scim_filter("title pr")

        assert ast == CompareNode(attr_path="title", op="pr")
        assert "value" not in ast.to_dict()

    def test_parse_from_tokens(self):
        assert parse(tokenize("active eq true")) == CompareNode(attr_path="active", op="eq", value=True)

    @pytest.mark.parametrize("tokens", [[], tokenize("active eq true")[:-1]])
    def test_token_stream_without_eof_rejected(self, tokens):
        with pytest.raises(InvalidFilterSyntax, match="EOF"):
            parse(tokens)

    @pytest.mark.parametrize("text,value", [
        ("a eq 42", 42),
        ("a eq -7", -7),
        ("a eq 1.5", 1.5),
        ("a eq true", True),
        ("a eq false", False),
        ("a eq null", None),
        ('a eq "42"', "42"),
    ])
    def test_comparison_values(self, text, value):
        ast = parse_scim_filter(text)
        assert ast.value == value
        assert type(ast.value) is type(value)

    def test_integer_and_float_types(self):
        assert isinstance(parse_scim_filter("a gt 10").value, int)
        assert isinstance(parse_scim_filter("a gt 10.0").value, float)

    def test_and_binds_tighter_than_or(self):
        ast = parse_scim_filter('a eq "1" or b eq "2" and c eq "3"')

        assert isinstance(ast, LogicalNode)
        assert ast.op == "or"
        assert ast.left == CompareNode(attr_path="a", op="eq", value="1")
        assert isinstance(ast.right, LogicalNode)
        assert ast.right.op == "and"

    def test_and_before_or(self):
        ast = parse_scim_filter('a eq "1" and b eq "2" or c eq "3"')

        assert ast.op == "or"
        assert isinstance(ast.left, LogicalNode)
        assert ast.left.op == "and"
        assert ast.right == CompareNode(attr_path="c", op="eq", value="3")

    def test_left_associative(self):
        ast = parse_scim_filter("a pr and b pr and c pr")

        assert ast.op == "and"
        assert ast.right == CompareNode(attr_path="c", op="pr")
        assert ast.left.op == "and"
        assert ast.left.left == CompareNode(attr_path="a", op="pr")

    def test_parentheses_override_precedence(self):
        ast = parse_scim_filter('(a eq "1" or b eq "2") and c eq "3"')

        assert ast.op == "and"
        assert ast.left.op == "or"

    def test_not(self):
        ast = parse_scim_filter("not (active eq false)")

        assert isinstance(ast, NotNode)
        assert ast.filter == CompareNode(attr_path="active", op="eq", value=False)

    def test_not_requires_parentheses(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected LPAREN"):
            parse_scim_filter("not active eq false")

    def test_value_path(self):
        ast = parse_scim_filter('emails[type eq "work" and primary eq true]')

        assert isinstance(ast, ValuePathNode)
        assert ast.attr_path == "emails"
        assert ast.filter.op == "and"
        assert ast.to_dict()["type"] == "valuePath"

    def test_value_path_combined_with_logical(self):
        ast = parse_scim_filter('emails[type eq "work"] or userName sw "b"')

        assert ast.op == "or"
        assert isinstance(ast.left, ValuePathNode)

    def test_keywords_case_insensitive(self):
        ast = parse_scim_filter('userName EQ "john" AND active Eq TRUE')

        assert ast.op == "and"
        assert ast.left.op == "eq"
        assert ast.right.value is True

    def test_urn_attribute(self):
        urn = "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User:department"
        ast = parse_scim_filter(f'{urn} eq "Sales"')

        assert ast.attr_path == urn

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_filter_rejected(self, text):
        with pytest.raises(InvalidFilterSyntax, match="cannot be empty") as exc_info:
            parse_scim_filter(text)
        assert exc_info.value.position is None

    def test_unterminated_string(self):
        with pytest.raises(InvalidFilterSyntax, match="Unterminated"):
            parse_scim_filter('userName eq "john')

    def test_missing_value(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected comparison value"):
            parse_scim_filter("userName eq")

    def test_attribute_as_value_rejected(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected comparison value"):
            parse_scim_filter("userName eq john")

    def test_missing_operator(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected OP"):
            parse_scim_filter('userName "john"')

    def test_trailing_tokens(self):
        with pytest.raises(InvalidFilterSyntax, match='Unexpected token "extra"'):
            parse_scim_filter('userName eq "john" extra')

    def test_unbalanced_parenthesis(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected RPAREN"):
            parse_scim_filter('(userName eq "john"')

    def test_unclosed_bracket(self):
        with pytest.raises(InvalidFilterSyntax, match="Expected RBRACKET"):
            parse_scim_filter('emails[type eq "work"')

    def test_dangling_logical_operator(self):
        with pytest.raises(InvalidFilterSyntax):
            parse_scim_filter('userName eq "john" and')

    def test_error_detail_includes_filter(self):
        with pytest.raises(InvalidFilterSyntax) as exc_info:
            parse_scim_filter("userName eq")
        assert "Invalid filter expression 'userName eq'" in exc_info.value.detail
