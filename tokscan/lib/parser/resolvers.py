"""
Token resolvers for TOKSCAN.

Implements specific resolution strategies for span content:
- Variables: mapping lookup with optional inline default values
- Parameters: positional marker rewriting that records parameter names
- Detection: notes whether a text holds any span at all
"""

from typing import Any, Mapping, Self
from tokscan.lib.log import LOG
from tokscan.lib.parser.base import GenericTokenParser
from tokscan.models.dataModel import ParameterMapping


class TokenResolverError(Exception):
    """Base class for errors raised by resolvers."""


class UnresolvedTokenError(TokenResolverError):
    """A variable was referenced but is not defined."""

    def __init__(self: Self, key: str) -> None:
        super().__init__(f"Variable not found: {key}")
        self.key: str = key


class ParameterSyntaxError(TokenResolverError):
    """A parameter span could not be split into name and attributes."""


class VariableResolver:
    """Resolver for named variables held in a mapping.

    Unknown variables are written back as the original placeholder so that
    partially configured templates survive rendering, unless strict mode is
    on, in which case UnresolvedTokenError is raised.
    """

    def __init__(
        self: Self,
        variables: Mapping[str, Any],
        open_token: str = "${",
        close_token: str = "}",
        default_enabled: bool = False,
        separator: str = ":",
        strict: bool = False,
    ) -> None:
        """Initialize resolver with its variables and placeholder syntax.

        Args:
            variables: Values to substitute, keyed by variable name
            open_token: Open token used when re-emitting unknown placeholders
            close_token: Close token used when re-emitting unknown placeholders
            default_enabled: Whether "key<separator>default" is understood
            separator: Separator between key and default value
            strict: Raise instead of re-emitting unknown placeholders

        Raises:
            ValueError: If default values are enabled with an empty separator
        """
        if default_enabled and not separator:
            raise ValueError("Default value separator cannot be empty")

        self.variables: Mapping[str, Any] = variables
        self.open_token: str = open_token
        self.close_token: str = close_token
        self.default_enabled: bool = default_enabled
        self.separator: str = separator
        self.strict: bool = strict

    def transform(self: Self, content: str) -> str:
        """Resolve a variable name to its value.

        Args:
            content: Variable name, optionally followed by separator and default

        Returns:
            The variable's value, its default, or the original placeholder

        Raises:
            UnresolvedTokenError: In strict mode, if no value is available
        """
        key: str = content
        if self.default_enabled and self.separator in content:
            key, default = content.split(self.separator, 1)
            if key in self.variables:
                return str(self.variables[key])
            return default

        if key in self.variables:
            return str(self.variables[key])

        if self.strict:
            LOG(f"Unresolved variable in strict mode: {key}")
            raise UnresolvedTokenError(key)
        return f"{self.open_token}{content}{self.close_token}"

    def parser(self: Self, escape_char: str = "\\") -> GenericTokenParser:
        """Build a parser using this resolver's own placeholder syntax."""
        return GenericTokenParser(
            self.open_token, self.close_token, self, escape_char=escape_char
        )


class ParameterResolver:
    """Resolver replacing each parameter span with a positional marker.

    Span content has the form "name, key=value, ..."; every span is recorded
    as a ParameterMapping so the caller can bind values in order.
    """

    def __init__(self: Self, marker: str = "?") -> None:
        self.marker: str = marker
        self.parameters: list[ParameterMapping] = []

    def transform(self: Self, content: str) -> str:
        """Record the parameter described by content and return the marker.

        Raises:
            ParameterSyntaxError: If the name is empty or an attribute lacks "="
        """
        self.parameters.append(self.mapping_build(content))
        return self.marker

    @staticmethod
    def mapping_build(content: str) -> ParameterMapping:
        """Split parameter content into its name and attributes."""
        name, *items = content.split(",")
        name = name.strip()
        if not name:
            raise ParameterSyntaxError(f"Parameter name missing in '{content}'")

        attributes: dict[str, str] = {}
        for item in items:
            if "=" not in item:
                raise ParameterSyntaxError(
                    f"Malformed attribute '{item.strip()}' in '{content}'"
                )
            attr, value = item.split("=", 1)
            attributes[attr.strip()] = value.strip()
        return ParameterMapping(property=name, attributes=attributes)

    def reset(self: Self) -> None:
        self.parameters.clear()


class SpanDetector:
    """Resolver that only notes that a span was seen."""

    def __init__(self: Self) -> None:
        self.found: bool = False

    def transform(self: Self, content: str) -> str:
        self.found = True
        return ""
