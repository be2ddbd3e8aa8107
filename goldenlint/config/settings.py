"""Pydantic-based configuration model and YAML loader for goldenlint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

__all__ = ["ConfigError", "RulesConfig", "GoldenLintSettings", "load_settings"]

logger = logging.getLogger(__name__)

_CONFIG_FILE_NAMES: list[str] = [
    "goldenlint.yaml",
    "goldenlint.yml",
    ".goldenlint.yaml",
    ".goldenlint.yml",
]


class ConfigError(Exception):
    def __init__(self, path: Path | None, detail: str) -> None:
        self.path = path
        self.detail = detail
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Invalid goldenlint configuration{where}: {detail}")


class RulesConfig(BaseModel):
    """Per-rule toggles."""

    bun_optimizations: bool = Field(
        default=True,
        description="Flag workers, database clients and scripts missing Bun optimisation flags.",
    )
    configuration_management: bool = Field(
        default=True,
        description="Flag hardcoded secrets/hosts and unvalidated environment access.",
    )
    stay_updated: bool = Field(
        default=True,
        description="Flag deprecated APIs and manifests without ES module type.",
    )


class GoldenLintSettings(BaseModel):
    """Top-level goldenlint configuration."""

    extensions: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"],
        description="File suffixes to lint.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["node_modules", ".git", "dist", "build"],
        description="Directory names skipped during discovery.",
    )
    server_path_markers: list[str] = Field(
        default_factory=lambda: ["server"],
        description="A file whose path contains any of these substrings is treated as server code.",
    )
    manifest_names: list[str] = Field(
        default_factory=lambda: ["package.json"],
        description="File names treated as package manifests.",
    )
    schema_libraries: list[str] = Field(
        default_factory=lambda: ["zod", "valibot", "yup", "joi"],
        description="Referencing any of these libraries marks env access as validated.",
    )
    fail_on: Literal["warning", "error", "never"] = Field(
        default="warning",
        description="Lowest violation severity that makes the lint command exit non-zero.",
    )
    rules: RulesConfig = Field(
        default_factory=RulesConfig,
        description="Per-rule configuration.",
    )


def _find_config_file(search_dir: Path) -> Path | None:
    """Walk up from *search_dir* looking for a config file."""
    current = search_dir.resolve()
    while True:
        for name in _CONFIG_FILE_NAMES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(path, str(exc)) from exc
    if not isinstance(raw, dict):
        raise ConfigError(path, "top-level YAML value must be a mapping")
    return raw


def load_settings(
    config_path: Path | None = None,
    search_dir: Path | None = None,
) -> GoldenLintSettings:
    """Load settings from a YAML file, falling back to defaults."""
    raw: dict[str, Any] = {}
    source: Path | None = None

    if config_path is not None:
        resolved = Path(config_path).resolve()
        if resolved.is_file():
            source = resolved
        else:
            logger.warning("Config file %s not found – using defaults", resolved)
    else:
        source = _find_config_file(search_dir or Path.cwd())

    if source is not None:
        logger.debug("Loading settings from %s", source)
        raw = _read_yaml(source)

    try:
        return GoldenLintSettings(**raw)
    except ValidationError as exc:
        raise ConfigError(source, str(exc)) from exc
