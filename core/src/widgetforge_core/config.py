from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

CONFIG_ENV_VAR = "WIDGETFORGE_CONFIG"


class I18nConfig(BaseModel):
    domain: str = Field(default="widgetforge", min_length=1)
    locale_dir: str | None = Field(
        default=None,
        description="Directory holding <lang>/LC_MESSAGES/<domain>.mo catalogues",
    )


class ResourceConfig(BaseModel):
    """Where page resources referenced by head entries are served from."""

    uri_prefix: str = Field(
        default="",
        description="Prefix prepended to style sheet and script URIs when displayed",
    )
    base_stylesheet: str = Field(default="packages/widgetforge/styles/widgetforge.css")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    log_file: str | None = Field(default=None, description="Optional rotating log file path")
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class ServerConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8790, ge=1, le=65535)


class ToolkitConfig(BaseModel):
    version: str = Field(default="1")
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    resources: ResourceConfig = Field(default_factory=ResourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def resolve_config_path(environ: dict[str, str] | None = None) -> Path | None:
    env = os.environ if environ is None else environ
    raw = (env.get(CONFIG_ENV_VAR) or "").strip()
    if not raw:
        return None
    return Path(raw).expanduser().resolve()


def load_toolkit_config(path: Path | None = None) -> ToolkitConfig:
    """Load toolkit config from a JSON file.

    - If no path is given, ${WIDGETFORGE_CONFIG} is used.
    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = path if path is not None else resolve_config_path()
    if config_path is None or not config_path.exists():
        return ToolkitConfig()

    raw = _read_json(config_path)
    return ToolkitConfig.model_validate(raw)


def write_toolkit_config(path: Path, config: ToolkitConfig) -> None:
    payload = config.model_dump(mode="json", exclude_none=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
