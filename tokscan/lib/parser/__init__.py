"""
Parser package for TOKSCAN token substitution.

Provides a generic delimited-token parser and a set of ready-made resolvers.
"""

from .base import GenericTokenParser, TokenHandler
from .resolvers import (
    VariableResolver,
    ParameterResolver,
    SpanDetector,
    TokenResolverError,
    UnresolvedTokenError,
    ParameterSyntaxError,
)

__all__ = [
    "GenericTokenParser",
    "TokenHandler",
    "VariableResolver",
    "ParameterResolver",
    "SpanDetector",
    "TokenResolverError",
    "UnresolvedTokenError",
    "ParameterSyntaxError",
]
