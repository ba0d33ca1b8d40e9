from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from bibnotes.exceptions import ConfigError

DEFAULT_TEMPLATE_PATH = "templates/bibtex-template.md"
DEFAULT_ENTRY_LIMIT = 5
DEFAULT_TITLE_WORDS = 3
DEFAULT_NOTES_FOLDER = "LN Literature Notes"
SETTINGS_FILENAME = ".bibnotes.json"

# settings file key -> ImportConfig attribute
SETTINGS_KEYS = {
    "templatePath": "template_path",
    "entryLimit": "entry_limit",
    "filePrefix": "file_prefix",
    "fileDirectory": "file_directory",
    "combineEntries": "combine_entries",
    "titleWords": "title_words",
}


@dataclass(slots=True, frozen=True)
class ImportConfig:
    template_path: str = DEFAULT_TEMPLATE_PATH
    entry_limit: int = DEFAULT_ENTRY_LIMIT
    file_prefix: str = ""
    file_directory: str = ""
    combine_entries: bool = False
    title_words: int = DEFAULT_TITLE_WORDS

    def __post_init__(self) -> None:
        if not isinstance(self.entry_limit, int) or isinstance(self.entry_limit, bool) or self.entry_limit < 1:
            raise ConfigError(f"entryLimit must be an integer >= 1, got {self.entry_limit!r}")
        if not isinstance(self.title_words, int) or isinstance(self.title_words, bool) or self.title_words < 1:
            raise ConfigError(f"titleWords must be an integer >= 1, got {self.title_words!r}")
        if not str(self.template_path).strip():
            raise ConfigError("templatePath must not be empty")

    @property
    def notes_folder(self) -> str:
        folder = self.file_directory.strip().strip("/")
        return folder or DEFAULT_NOTES_FOLDER

    def replace(self, **changes: Any) -> ImportConfig:
        return replace(self, **changes)

    def as_settings(self) -> dict[str, Any]:
        values = asdict(self)
        return {key: values[attr] for key, attr in SETTINGS_KEYS.items()}


def config_from_settings(settings: dict[str, Any]) -> ImportConfig:
    changes: dict[str, Any] = {}
    for key, attr in SETTINGS_KEYS.items():
        if key in settings:
            changes[attr] = coerce_setting(key, settings[key])
    return ImportConfig(**changes)


def coerce_setting(key: str, value: Any) -> Any:
    """Convert a raw settings value (possibly typed by a user) to its field type."""
    if key not in SETTINGS_KEYS:
        raise ConfigError(f"Unknown setting: {key}")
    attr = SETTINGS_KEYS[key]
    if attr in ("entry_limit", "title_words"):
        if isinstance(value, bool):
            raise ConfigError(f"{key} must be an integer, got {value!r}")
        try:
            return int(str(value).strip())
        except ValueError as exc:
            raise ConfigError(f"{key} must be an integer, got {value!r}") from exc
    if attr == "combine_entries":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off", ""):
            return False
        raise ConfigError(f"{key} must be a boolean, got {value!r}")
    if value is None:
        return ""
    return str(value)


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        return ImportConfig()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Settings file is not valid JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"Settings file must contain a JSON object: {path}")
    return config_from_settings(payload)


def save_config(path: Path, config: ImportConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.as_settings(), indent=2) + "\n", encoding="utf-8")


@dataclass(slots=True)
class EnvConfig:
    vault: Path
    settings_path: Path


def load_env() -> EnvConfig:
    load_dotenv()
    vault = Path(os.getenv("BIBNOTES_VAULT", "."))
    settings = os.getenv("BIBNOTES_SETTINGS")
    return EnvConfig(
        vault=vault,
        settings_path=Path(settings) if settings else vault / SETTINGS_FILENAME,
    )
