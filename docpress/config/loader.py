"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import DocpressConfig

PROJECT_CONFIG = Path("docpress.yaml")

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def load_config(cli_path: str | None = None) -> DocpressConfig:
    """Load config with resolution order: CLI > project-local > defaults.

    An explicit path must exist. An empty file yields the defaults.
    """
    if cli_path:
        path = Path(cli_path)
        if not path.exists():
            raise ValueError(f"Config file not found: {cli_path}")
    elif PROJECT_CONFIG.exists():
        path = PROJECT_CONFIG
    else:
        return DocpressConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping")

    try:
        return DocpressConfig.model_validate(_expand_env_vars(raw))
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e


def _expand_env_vars(value: object) -> object:
    """Substitute ${VAR} in every string of a loaded YAML tree; unset vars become ""."""
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    return value


# Default YAML template for `docpress config init`
DEFAULT_CONFIG_TEMPLATE = """\
# docpress.yaml

# Source trees to convert. Each markdown file under `source` becomes
# <output.root>/<assets>/<relative path>.json
sites:
  - source: "docs-md"
    structure: "src/assets/docs-structure.json"
    assets: "assets/docs-content"
    exclude: ["README.md"]

# Commit-history attribution
github:
  enabled: true
  repo: ""                     # owner/name
  token_env: "GITHUB_TOKEN"    # optional, raises the API rate limit
  since: "2018-06-01"
  timeout: 15

# Markdown rendering
render:
  extensions: ["tables"]
  code_block_class: "highlight"
  language_prefix: "language-"

# Output
output:
  root: "src"
  # indent: 2

# Batch failure policy
on_error: "fail_fast"          # fail_fast | collect

# Logging
log_level: "info"              # debug | info | warn | error
"""
