"""Access to the credentials stored by the Exercism CLI application."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from .client import Credentials
from .exceptions import ApiTokenNotFoundInConfigError, ConfigNotFoundError, ConfigParseError, ConfigReadError

logger = logging.getLogger(__name__)

CLI_CONFIG_FILE_NAME = "user.json"


def get_cli_config_dir(
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> Optional[Path]:
    """
    Directory where the Exercism CLI stores its configuration.

    On Windows this is ``%APPDATA%\\exercism``. Elsewhere it is
    ``$EXERCISM_CONFIG_HOME``, falling back to ``$XDG_CONFIG_HOME/exercism``
    and then ``$HOME/.config/exercism``. Returns None if nothing resolves.
    """
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    if platform.startswith("win"):
        app_data = environ.get("APPDATA")
        return Path(app_data, "exercism") if app_data else None

    config_home = environ.get("EXERCISM_CONFIG_HOME")
    if config_home:
        return Path(config_home)
    xdg_config_home = environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home, "exercism")
    home = environ.get("HOME")
    if home:
        return Path(home, ".config", "exercism")
    return None


def parse_cli_config(config: str) -> str:
    """Extract the API token from the content of ``user.json``."""
    try:
        data = json.loads(config)
    except ValueError as exc:
        raise ConfigParseError(f"failed to parse Exercism CLI config: {exc}", original_exception=exc) from exc

    token = data.get("token") if isinstance(data, dict) else None
    token = token.strip() if isinstance(token, str) else ""
    if not token:
        raise ApiTokenNotFoundInConfigError()
    return token


def get_cli_credentials(config_dir: Optional[Path] = None) -> Credentials:
    """
    Read the API token from the Exercism CLI config file.

    Without an explicit ``config_dir`` the CLI config directory is used, or
    the current directory if it cannot be determined.
    """
    if config_dir is None:
        config_dir = get_cli_config_dir() or Path.cwd()
    config_path = Path(config_dir) / CLI_CONFIG_FILE_NAME
    logger.debug("Reading Exercism CLI config from %s", config_path)

    try:
        config = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigNotFoundError(original_exception=exc, path=str(config_path)) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(
            f"failed to read Exercism CLI config {config_path}: {exc}",
            original_exception=exc,
            path=str(config_path),
        ) from exc

    return Credentials.from_api_token(parse_cli_config(config))
