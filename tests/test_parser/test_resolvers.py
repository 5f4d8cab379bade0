"""Tests for variable, parameter and detection resolvers."""

import pytest
from tokscan.lib.parser import GenericTokenParser
from tokscan.lib.parser.resolvers import (
    VariableResolver,
    ParameterResolver,
    SpanDetector,
    UnresolvedTokenError,
    ParameterSyntaxError,
    TokenResolverError,
)
from tokscan.models.dataModel import ParameterMapping


@pytest.fixture
def variables() -> dict[str, str]:
    return {"name": "world", "port": "8080", "empty": ""}


def test_variable_resolver(variables):
    resolver = VariableResolver(variables)
    assert resolver.transform("name") == "world"
    assert resolver.transform("empty") == ""


def test_variable_resolver_non_string_value():
    resolver = VariableResolver({"count": 3})
    assert resolver.transform("count") == "3"


def test_variable_resolver_missing_keeps_placeholder(variables):
    resolver = VariableResolver(variables)
    assert resolver.transform("missing") == "${missing}"


def test_variable_resolver_missing_custom_tokens(variables):
    resolver = VariableResolver(variables, open_token="{{", close_token="}}")
    assert resolver.transform("missing") == "{{missing}}"


def test_variable_resolver_default_disabled(variables):
    resolver = VariableResolver(variables)
    assert resolver.transform("host:localhost") == "${host:localhost}"


def test_variable_resolver_default_value(variables):
    resolver = VariableResolver(variables, default_enabled=True)
    assert resolver.transform("host:localhost") == "localhost"
    assert resolver.transform("port:80") == "8080"
    assert resolver.transform("url:http://x:1") == "http://x:1"
    assert resolver.transform("host:") == ""


def test_variable_resolver_custom_separator(variables):
    resolver = VariableResolver(variables, default_enabled=True, separator="?:")
    assert resolver.transform("host?:localhost") == "localhost"
    assert resolver.transform("a:b") == "${a:b}"


def test_variable_resolver_empty_separator_rejected(variables):
    with pytest.raises(ValueError):
        VariableResolver(variables, default_enabled=True, separator="")


def test_variable_resolver_strict(variables):
    resolver = VariableResolver(variables, strict=True)
    with pytest.raises(UnresolvedTokenError) as exc_info:
        resolver.transform("missing")
    assert exc_info.value.key == "missing"
    assert isinstance(exc_info.value, TokenResolverError)


def test_variable_resolver_strict_with_default(variables):
    resolver = VariableResolver(variables, default_enabled=True, strict=True)
    assert resolver.transform("missing:fallback") == "fallback"


def test_variable_resolver_parser(variables):
    parser = VariableResolver(variables).parser()
    assert isinstance(parser, GenericTokenParser)
    assert (
        parser.parse("Hello ${name}, \\${name} on ${port} ${nope}")
        == "Hello world, ${name} on 8080 ${nope}"
    )


def test_variable_resolver_strict_error_propagates_through_parser(variables):
    parser = VariableResolver(variables, strict=True).parser()
    with pytest.raises(UnresolvedTokenError):
        parser.parse("${name} ${missing}")


def test_parameter_resolver():
    resolver = ParameterResolver()
    parser = GenericTokenParser("#{", "}", resolver)
    sql = parser.parse("select * from t where id = #{id} and n = #{name, type=VARCHAR}")
    assert sql == "select * from t where id = ? and n = ?"
    assert resolver.parameters == [
        ParameterMapping(property="id"),
        ParameterMapping(property="name", attributes={"type": "VARCHAR"}),
    ]


def test_parameter_resolver_reset():
    resolver = ParameterResolver(marker="%s")
    assert resolver.transform("id") == "%s"
    resolver.reset()
    assert resolver.parameters == []


@pytest.mark.parametrize("content", ["", " ", ",type=int", "id, type"])
def test_parameter_resolver_syntax_error(content):
    with pytest.raises(ParameterSyntaxError):
        ParameterResolver().transform(content)


def test_parameter_mapping_build_strips_whitespace():
    mapping = ParameterResolver.mapping_build(" id , mode = IN , scale=2 ")
    assert mapping.property == "id"
    assert mapping.attributes == {"mode": "IN", "scale": "2"}


@pytest.mark.parametrize(
    "text,expected",
    [
        ("select ${col}", True),
        ("select \\${col}", False),
        ("select ${col", False),
        ("", False),
        (None, False),
    ],
)
def test_span_detector(text, expected):
    detector = SpanDetector()
    GenericTokenParser("${", "}", detector).parse(text)
    assert detector.found is expected
