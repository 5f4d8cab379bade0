"""
settings.py

This module provides application configuration management for the TOKSCAN
application.

Features:
- Centralized application configuration using Pydantic settings
- Constants for application-wide use
- Loading of substitution variables from the user config file, JSON files
  and KEY=VALUE pairs

Usage:
Import appsettings for application configuration values.
"""

import json
from pathlib import Path
from typing import Any, Final
from appdirs import user_config_dir
from pydantic_settings import BaseSettings, SettingsConfigDict
from tokscan.lib.log import LOG

# Set up the configuration directory and file using appdirs
CONFIG_DIR: Final[Path] = Path(user_config_dir("tokscan", ""))
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with TOKSCAN_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        openToken: Marker that starts a placeholder
        closeToken: Marker that ends a placeholder
        escapeChar: Character escaping a following marker
        defaultValueEnabled: Understand "key:default" placeholders
        defaultValueSeparator: Separator between key and default value
        strict: Fail on placeholders without a value
        filePattern: Glob selecting the files to render
    """

    beQuiet: bool = False
    openToken: str = "${"
    closeToken: str = "}"
    escapeChar: str = "\\"
    defaultValueEnabled: bool = False
    defaultValueSeparator: str = ":"
    strict: bool = False
    filePattern: str = "**/*.txt"

    model_config = SettingsConfigDict(
        env_prefix="TOKSCAN_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


def json_objectRead(path: Path) -> dict[str, Any]:
    """
    Read a JSON file that must contain an object.

    Args:
        path: The file to read

    Returns:
        dict: The decoded object

    Raises:
        ValueError: If the file cannot be read, is not valid JSON or is not
            a JSON object
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Error reading file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def variables_load(
    pairs: list[str] | None = None,
    vars_file: Path | None = None,
    config_file: Path = CONFIG_FILE,
) -> dict[str, str]:
    """
    Collect substitution variables from every configured source.

    Later sources override earlier ones:
    1. The "variables" object of the user config file, if it exists
    2. The JSON object in vars_file
    3. KEY=VALUE pairs

    Args:
        pairs: KEY=VALUE strings, typically from the command line
        vars_file: Optional JSON file holding an object of variables
        config_file: User configuration file

    Returns:
        dict: Variable names mapped to string values

    Raises:
        ValueError: On malformed pairs or JSON sources
    """
    variables: dict[str, str] = {}

    if config_file.exists():
        config: dict[str, Any] = json_objectRead(config_file)
        defaults: Any = config.get("variables", {})
        if not isinstance(defaults, dict):
            raise ValueError(f"'variables' in {config_file} must be an object")
        variables.update({k: str(v) for k, v in defaults.items()})
        LOG(f"Loaded {len(defaults)} variables from {config_file}")

    if vars_file is not None:
        loaded: dict[str, Any] = json_objectRead(vars_file)
        variables.update({k: str(v) for k, v in loaded.items()})
        LOG(f"Loaded {len(loaded)} variables from {vars_file}")

    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
        variables[key.strip()] = value

    return variables


# Create the application settings instance
appsettings: Final[App] = App()
