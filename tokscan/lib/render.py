"""
Rendering of strings and files for TOKSCAN.

This module drives configured token parsers over input text and reports the
outcome through result models, so callers never have to handle resolver
exceptions themselves.

The module handles:
- Parser construction from application settings
- String rendering
- Dynamic text detection
- File and directory tree rendering
"""

from pathlib import Path
from typing import Mapping
from chris_plugin import PathMapper
from tokscan.config.settings import App
from tokscan.lib.log import LOG
from tokscan.lib.parser import GenericTokenParser, VariableResolver, SpanDetector
from tokscan.models.dataModel import RenderResult, RenderSummary


def parser_build(settings: App, variables: Mapping[str, str]) -> GenericTokenParser:
    """Build a variable substitution parser from settings.

    Args:
        settings: Application settings holding tokens and resolution flags
        variables: Values available for substitution

    Returns:
        GenericTokenParser backed by a VariableResolver

    Raises:
        ValueError: If the configured tokens are invalid
    """
    resolver: VariableResolver = VariableResolver(
        variables,
        open_token=settings.openToken,
        close_token=settings.closeToken,
        default_enabled=settings.defaultValueEnabled,
        separator=settings.defaultValueSeparator,
        strict=settings.strict,
    )
    return resolver.parser(escape_char=settings.escapeChar)


def text_render(
    text: str | None, parser: GenericTokenParser, source: str | None = None
) -> RenderResult:
    """Render text, turning resolver failures into a failed result.

    Args:
        text: Text to render
        parser: Configured parser
        source: Optional description of where the text came from

    Returns:
        RenderResult with the rendered text or error details
    """
    try:
        return RenderResult(text=parser.parse(text), source=source)
    except Exception as e:
        LOG(f"Error rendering {source or 'text'}: {e}")
        return RenderResult(text="", error=str(e), success=False, source=source)


def text_isDynamic(text: str | None, open_token: str, close_token: str) -> bool:
    """Check whether text contains at least one resolvable span."""
    detector: SpanDetector = SpanDetector()
    GenericTokenParser(open_token, close_token, detector).parse(text)
    return detector.found


def file_render(
    input_file: Path, output_file: Path, parser: GenericTokenParser
) -> RenderResult:
    """Render one file into another.

    The output file is only written when rendering succeeds.

    Args:
        input_file: UTF-8 encoded template
        output_file: Destination, parent directories are created as needed
        parser: Configured parser

    Returns:
        RenderResult for the file
    """
    source: str = str(input_file)
    try:
        content: str = input_file.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        msg: str = f"File is not valid UTF-8: {input_file}"
        LOG(msg)
        return RenderResult(text="", error=msg, success=False, source=source)
    except OSError as e:
        msg = f"Error reading file {input_file}: {e}"
        LOG(msg)
        return RenderResult(text="", error=msg, success=False, source=source)

    result: RenderResult = text_render(content, parser, source=source)
    if not result.success:
        return result

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(result.text, encoding="utf-8")
    except OSError as e:
        msg = f"Error writing file {output_file}: {e}"
        LOG(msg)
        return RenderResult(text="", error=msg, success=False, source=source)

    LOG(f"Rendered {input_file} -> {output_file}")
    return result


def directory_render(
    inputdir: Path, outputdir: Path, parser: GenericTokenParser, pattern: str
) -> RenderSummary:
    """Render every file under inputdir matching pattern into outputdir.

    Relative paths are preserved. A failing file does not stop the batch.

    Args:
        inputdir: Directory holding the templates
        outputdir: Directory receiving rendered files
        parser: Configured parser
        pattern: Glob relative to inputdir (e.g. "**/*.txt")

    Returns:
        RenderSummary counting rendered and failed files
    """
    summary: RenderSummary = RenderSummary()
    mapper: PathMapper = PathMapper.file_mapper(
        inputdir, outputdir, glob=pattern, fail_if_empty=False
    )
    for input_file, output_file in mapper:
        result: RenderResult = file_render(input_file, output_file, parser)
        if result.success:
            summary.rendered += 1
        else:
            summary.failed += 1
            summary.errors.append(f"{input_file}: {result.error}")
    LOG(f"Rendered {summary.rendered} files, {summary.failed} failed")
    return summary
