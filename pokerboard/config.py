"""Settings for Pokerboard.

Values come from, in increasing priority:
  1. Built-in defaults
  2. A YAML file (`pokerboard.yml` in the working directory, or --config)
  3. Environment variables (a `.env` file in the working directory is loaded first)

Environment variables:
  POKERBOARD_RESOURCES_DIR - Directory holding <card>.jpeg assets
  POKERBOARD_OUTPUT_DIR - Directory for flop/turn/river images
  POKERBOARD_JPEG_QUALITY - JPEG quality for written images (1-100)
  IMGUR_CLIENT_ID - Imgur application client ID for uploads
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = Path("pokerboard.yml")

ENV_VARS = {
    "resources_dir": "POKERBOARD_RESOURCES_DIR",
    "output_dir": "POKERBOARD_OUTPUT_DIR",
    "jpeg_quality": "POKERBOARD_JPEG_QUALITY",
    "imgur_client_id": "IMGUR_CLIENT_ID",
}


@dataclass
class Settings:
    resources_dir: Path = Path("resources")
    output_dir: Path = Path("output")
    jpeg_quality: int = 100
    background: str = "white"
    imgur_client_id: Optional[str] = None


def _parse_quality(value) -> int:
    try:
        quality = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"jpeg_quality must be an integer, got {value!r}")
    if not 1 <= quality <= 100:
        raise ValueError(f"jpeg_quality must be between 1 and 100, got {quality}")
    return quality


def _read_config_file(config_path: Path) -> dict:
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path}: invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at top level")

    known = {field.name for field in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"{config_path}: unknown settings {', '.join(unknown)}")

    empty = sorted(name for name, value in data.items() if value is None)
    if empty:
        raise ValueError(f"{config_path}: settings without a value: {', '.join(empty)}")
    return data


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Build Settings from the config file and environment.

    Args:
        config_path: YAML file to read (must exist if given). Defaults to
            ./pokerboard.yml when present.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ValueError: If a setting is unknown or invalid
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    values: dict = {}
    if config_path is not None:
        values.update(_read_config_file(Path(config_path)))
    elif DEFAULT_CONFIG_PATH.exists():
        values.update(_read_config_file(DEFAULT_CONFIG_PATH))

    for name, env_var in ENV_VARS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[name] = env_value

    settings = Settings()
    if "resources_dir" in values:
        settings.resources_dir = Path(values["resources_dir"])
    if "output_dir" in values:
        settings.output_dir = Path(values["output_dir"])
    if "jpeg_quality" in values:
        settings.jpeg_quality = _parse_quality(values["jpeg_quality"])
    if "background" in values:
        settings.background = str(values["background"])
    if "imgur_client_id" in values:
        settings.imgur_client_id = str(values["imgur_client_id"])

    return settings
