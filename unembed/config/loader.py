"""YAML config loading with env var expansion, and settings persistence."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import UnembedConfig

CONFIG_FILENAME = "unembed.yaml"


class SettingsStore:
    """Reads and writes the persisted config file.

    `load()` returns whatever partial mapping is on disk; defaults are filled
    in when it is turned into an UnembedConfig.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.path}: {e}") from e
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {self.path}: expected a mapping")
        return raw

    def save(self, config: UnembedConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False)
        )


def config_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate config files, highest priority first."""
    paths = [Path(cli_path)] if cli_path else []
    paths += [Path(".") / CONFIG_FILENAME, Path.home() / ".unembed" / "config.yaml"]
    return paths


def resolve_config_path(cli_path: str | None = None) -> Path:
    """The file `config set` writes to: the CLI path, else the first existing file, else ./unembed.yaml."""
    if cli_path:
        return Path(cli_path)
    for path in config_paths():
        if path.exists():
            return path
    return Path(".") / CONFIG_FILENAME


def load_config(cli_path: str | None = None) -> UnembedConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    for path in config_paths(cli_path):
        if not path.exists():
            continue
        raw = SettingsStore(path).load()
        if not raw:
            continue
        try:
            return UnembedConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return UnembedConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `unembed config init`
DEFAULT_CONFIG_TEMPLATE = """\
# unembed.yaml

# Vault root; note paths are resolved relative to it
vault_path: "."

converter:
  output_folder: "attachments"   # created next to each note
  auto_convert: false            # convert on note change in `unembed watch`
  # placeholders: {{date}}, {{index}}, {{type}}; ".png" is appended
  filename_format: "image-{{date}}-{{index}}"

# Delay before a changed note is converted in watch mode
paste_debounce_ms: 100

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
