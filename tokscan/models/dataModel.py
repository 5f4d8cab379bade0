"""
dataModel.py

This module defines the data models used throughout the TOKSCAN application.
The models leverage Pydantic for validation and type safety.

Features:
- Rendering results for strings and files
- Parameter mappings recorded while rewriting parameter spans
- Batch rendering summaries

Usage:
Import these models to structure data returned by the rendering layer.
"""

from pydantic import BaseModel, Field


class RenderResult(BaseModel):
    """Result of a rendering operation.

    Attributes:
        text: The processed text after substitutions
        error: Optional error message if rendering failed
        success: Whether rendering succeeded
        source: File the text came from, None for plain strings
    """

    text: str
    error: str | None = None
    success: bool = True
    source: str | None = None


class ParameterMapping(BaseModel):
    """
    A parameter recorded from a span such as "#{id, type=int}".

    Attributes:
        property (str): The parameter name.
        attributes (dict[str, str]): Additional key=value settings.
    """

    property: str = Field(..., description="Parameter name.")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Additional parameter attributes."
    )


class RenderSummary(BaseModel):
    """Outcome of rendering a directory tree.

    Attributes:
        rendered: Number of files written
        failed: Number of files that could not be rendered
        errors: One message per failed file
    """

    rendered: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
