"""Fixed rule registry, built once from settings."""
from __future__ import annotations
from dataclasses import dataclass
from goldenlint.config.settings import GoldenLintSettings
from goldenlint.rules.base_rule import BaseRule
from goldenlint.rules.deprecated_rule import DeprecatedPatternRule
from goldenlint.rules.hardcoded_config_rule import HardcodedConfigRule
from goldenlint.rules.optimization_rule import BunOptimizationsRule
from goldenlint.rules.paths import PathClassifier

__all__ = ["RegisteredRule", "build_registry", "enabled_rules"]


@dataclass(frozen=True)
class RegisteredRule:
    key: str
    rule: BaseRule
    enabled: bool


def build_registry(settings: GoldenLintSettings) -> tuple[RegisteredRule, ...]:
    paths = PathClassifier(
        server_markers=tuple(settings.server_path_markers),
        manifest_names=tuple(settings.manifest_names),
    )
    cfg = settings.rules
    return (
        RegisteredRule("bun_optimizations", BunOptimizationsRule(paths), cfg.bun_optimizations),
        RegisteredRule(
            "configuration_management",
            HardcodedConfigRule(settings.schema_libraries),
            cfg.configuration_management,
        ),
        RegisteredRule("stay_updated", DeprecatedPatternRule(paths), cfg.stay_updated),
    )


def enabled_rules(settings: GoldenLintSettings) -> list[BaseRule]:
    return [entry.rule for entry in build_registry(settings) if entry.enabled]
