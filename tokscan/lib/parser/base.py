r"""
Generic delimited-token parser.

Locates every span delimited by an open and a close token, hands the span's
inner content to a resolver and substitutes the resolver's result back into
the text. Everything outside the spans is copied verbatim.

The parser handles:
- Arbitrary, multi-character open and close tokens
- Escaped open tokens (\${ is emitted as a literal ${)
- Escaped close tokens inside a span (they become part of the content)
- Unterminated spans, which are emitted as literal text
- Resolver strategies given as objects or as plain callables

Resolver exceptions are never caught here; they reach the caller unchanged.

Example:
    parser = GenericTokenParser("${", "}", VariableResolver({"name": "world"}))
    result = parser.parse("Hello ${name}")   # "Hello world"
"""

from typing import Callable, Protocol, runtime_checkable, Self
from tokscan.lib.log import LOG


@runtime_checkable
class TokenHandler(Protocol):
    """Protocol defining the resolver interface for span substitution.

    Resolvers receive the de-escaped content of one span and return the text
    that replaces the whole span, delimiters included.
    """

    def transform(self: Self, content: str) -> str:
        """Return the replacement for a span.

        Args:
            content: Inner text of the span, escape characters removed

        Returns:
            Replacement text, inserted verbatim
        """
        ...


class GenericTokenParser:
    """Single pass parser for open/close delimited tokens.

    Attributes:
        open_token: Marker that starts a span (e.g. "${")
        close_token: Marker that ends a span (e.g. "}")
        escape_char: Character that escapes a following token
    """

    def __init__(
        self: Self,
        open_token: str,
        close_token: str,
        resolver: TokenHandler | Callable[[str], str],
        escape_char: str = "\\",
    ) -> None:
        """Initialize parser with token configuration.

        Args:
            open_token: Marker that starts a span
            close_token: Marker that ends a span
            resolver: TokenHandler, or any callable taking the span content
            escape_char: Single character used for escaping tokens

        Raises:
            ValueError: If a token is empty or escape_char is not one character
            TypeError: If resolver is neither a TokenHandler nor callable
        """
        if not open_token or not close_token:
            raise ValueError("Open and close tokens cannot be empty")
        if len(escape_char) != 1:
            raise ValueError("Escape character must be a single character")

        self.open_token: str = open_token
        self.close_token: str = close_token
        self.escape_char: str = escape_char
        self.resolver: TokenHandler | Callable[[str], str] = resolver

        if isinstance(resolver, TokenHandler):
            self._transform: Callable[[str], str] = resolver.transform
        elif callable(resolver):
            self._transform = resolver
        else:
            raise TypeError(
                f"Resolver must implement transform() or be callable: {resolver!r}"
            )
        LOG(f"Token parser configured for '{open_token}' ... '{close_token}'")

    def parse(self: Self, text: str | None) -> str:
        """Substitute every resolved span in text.

        Args:
            text: Input text, possibly empty or None

        Returns:
            Text with spans replaced by the resolver's results
        """
        if not text:
            return ""

        start: int = text.find(self.open_token)
        if start == -1:
            return text

        offset: int = 0
        builder: list[str] = []
        while start > -1:
            if start > 0 and text[start - 1] == self.escape_char:
                # escaped open token: drop the escape, keep the token literally
                builder.append(text[offset : start - 1])
                builder.append(self.open_token)
                offset = start + len(self.open_token)
            else:
                builder.append(text[offset:start])
                offset = start + len(self.open_token)
                expression, end = self._expression_collect(text, offset)
                if end == -1:
                    # unterminated span, emit the rest of the input as is
                    builder.append(text[start:])
                    offset = len(text)
                else:
                    builder.append(self._transform(expression))
                    offset = end + len(self.close_token)
            start = text.find(self.open_token, offset)

        if offset < len(text):
            builder.append(text[offset:])
        return "".join(builder)

    def _expression_collect(self: Self, text: str, offset: int) -> tuple[str, int]:
        """Accumulate span content up to the first unescaped close token.

        Args:
            text: Full input text
            offset: Position just past the open token

        Returns:
            Tuple of (content, end) where end is the index of the closing
            token, or -1 when the span is never closed
        """
        expression: list[str] = []
        end: int = text.find(self.close_token, offset)
        while end > -1:
            if end > offset and text[end - 1] == self.escape_char:
                expression.append(text[offset : end - 1])
                expression.append(self.close_token)
                offset = end + len(self.close_token)
                end = text.find(self.close_token, offset)
            else:
                expression.append(text[offset:end])
                break
        return "".join(expression), end
