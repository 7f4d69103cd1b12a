import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from linkhub.settings.models import Settings

SETTINGS_PATH_ENV = "LINKHUB_SETTINGS_PATH"
API_URL_ENV = "LINKHUB_API_URL"
DEFAULT_SETTINGS_PATH = "linkhub.yaml"


def load_settings(path: Path) -> Settings:
    """
    Load and validate the settings file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in settings file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Settings validation failed:\n{e}") from e


def settings_from_env(environ: dict[str, str] | None = None) -> Settings:
    """
    Resolve settings the way the app and CLI start up.

    LINKHUB_SETTINGS_PATH points at a YAML file (default ./linkhub.yaml,
    optional); LINKHUB_API_URL overrides api.base_url.
    """
    env = os.environ if environ is None else environ

    explicit = env.get(SETTINGS_PATH_ENV)
    path = Path(explicit or DEFAULT_SETTINGS_PATH)
    if explicit or path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()

    api_url = env.get(API_URL_ENV)
    if api_url:
        settings.api.base_url = api_url.rstrip("/")

    return settings
