"""
TOKSCAN Plugin Main Module.

This module serves as the main entry point for the TOKSCAN plugin, a ChRIS
plugin that renders placeholder templates.

Features:
- Renders every file matching a glob from the input into the output directory
- Substitutes ${name} placeholders from config, JSON files and --var pairs
- Configurable placeholder tokens, inline defaults and strict mode
- Escaped tokens (\\${name}) are written literally

Usage:
    Run this module as a ChRIS plugin with an input and output directory.

Examples:
    Render all text files:
        $ tokscan --var name=world incoming/ outgoing/

    Use a variables file and inline defaults:
        $ tokscan --vars vars.json --defaults incoming/ outgoing/

    Use mustache style tokens on markdown files:
        $ tokscan --open "{{" --close "}}" --pattern "**/*.md" incoming/ outgoing/

Note:
    Variable precedence, lowest to highest:
    1. user config file
    2. --vars file
    3. --var pairs
"""

from pathlib import Path
from argparse import Namespace, ArgumentParser, ArgumentDefaultsHelpFormatter
from chris_plugin import chris_plugin
from rich.console import Console
from tokscan.config.settings import App, appsettings, variables_load
from tokscan.lib.log import LOG
from tokscan.lib.parser import GenericTokenParser
from tokscan.lib.render import parser_build, directory_render
from tokscan.models.dataModel import RenderSummary
import sys
from typing import Final

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()

# Define the argument parser for the plugin
parser: Final[ArgumentParser] = ArgumentParser(
    description="A ChRIS plugin that renders placeholder templates.",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
parser.add_argument("--open", type=str, help="Placeholder open token")
parser.add_argument("--close", type=str, help="Placeholder close token")
parser.add_argument(
    "--var",
    type=str,
    action="append",
    default=[],
    metavar="KEY=VALUE",
    help="Variable to substitute (repeatable)",
)
parser.add_argument("--vars", type=str, help="JSON file holding an object of variables")
parser.add_argument("--pattern", type=str, help="Glob selecting the files to render")
parser.add_argument(
    "--defaults", action="store_true", help="Enable ${key:default} placeholders"
)
parser.add_argument("--separator", type=str, help="Key/default value separator")
parser.add_argument(
    "--strict", action="store_true", help="Fail on placeholders without a value"
)
parser.add_argument(
    "-V", "--version", action="version", version=f"%(prog)s {__version__}"
)


def settings_resolve(options: Namespace, settings: App | None = None) -> App:
    """Overlay command line options on the application settings.

    Args:
        options: Parsed command-line arguments
        settings: Base settings, appsettings when omitted

    Returns:
        App: A new settings object, the base is left untouched
    """
    settings = settings or appsettings
    overrides: dict[str, object] = {}
    if options.open:
        overrides["openToken"] = options.open
    if options.close:
        overrides["closeToken"] = options.close
    if options.pattern:
        overrides["filePattern"] = options.pattern
    if options.separator:
        overrides["defaultValueSeparator"] = options.separator
    if options.defaults:
        overrides["defaultValueEnabled"] = True
    if options.strict:
        overrides["strict"] = True
    return settings.model_copy(update=overrides)


def run(options: Namespace, inputdir: Path, outputdir: Path) -> RenderSummary:
    """Render the input directory into the output directory.

    Args:
        options: Parsed command-line arguments
        inputdir: Directory containing templates
        outputdir: Directory for rendered files

    Returns:
        RenderSummary of the batch

    Raises:
        ValueError: If tokens or variable sources are invalid
    """
    settings: App = settings_resolve(options)
    variables: dict[str, str] = variables_load(
        options.var, Path(options.vars) if options.vars else None
    )
    LOG(f"Rendering with {len(variables)} variables")
    template_parser: GenericTokenParser = parser_build(settings, variables)
    return directory_render(inputdir, outputdir, template_parser, settings.filePattern)


@chris_plugin(
    parser=parser,
    title="pl-tokscan",
    category="",
    min_memory_limit="100Mi",
    min_cpu_limit="1000m",
    min_gpu_limit=0,
)
def main(options: Namespace, inputdir: Path, outputdir: Path) -> None:
    """Main entry point for the ChRIS plugin.

    Args:
        options: Parsed command-line options
        inputdir: Directory containing input files
        outputdir: Directory for output files
    """
    try:
        summary: RenderSummary = run(options, inputdir, outputdir)
    except ValueError as e:
        LOG(f"Configuration error: {e}")
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    for error in summary.errors:
        console.print(f"[bold red]Failed:[/bold red] {error}")
    console.print(
        f"[bold green]Rendered {summary.rendered} file(s)[/bold green], "
        f"[bold red]{summary.failed} failed[/bold red]"
    )
    if summary.failed:
        sys.exit(1)
