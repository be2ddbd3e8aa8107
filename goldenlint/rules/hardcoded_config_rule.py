"""Rule: Detect hardcoded secrets/hosts and unvalidated environment access."""
from __future__ import annotations
import re
from typing import Iterable
from goldenlint.rules.base_rule import BaseRule, Check, CommentStyle, LineRegexCheck

__all__ = ["HardcodedConfigRule", "HARDCODED_VALUE_PATTERNS", "DEFAULT_SCHEMA_LIBRARIES"]

HARDCODED_VALUE_PATTERNS: tuple[str, ...] = (
    r"\b\w*(?:password|passwd|secret|api[_-]?key|token)\w*\s*[:=]\s*['\"`][^'\"`]+['\"`]",
    r"\blocalhost:\d{2,5}\b",
    r"\bhttps?://\d{1,3}(?:\.\d{1,3}){3}\b",
    r"\b(?:mongodb(?:\+srv)?|postgres(?:ql)?|mysql|redis)://[^\s'\"`:@/]+:[^\s'\"`@/]+@",
)
_HARDCODED_RE = re.compile("|".join(f"(?:{p})" for p in HARDCODED_VALUE_PATTERNS), re.IGNORECASE)
_ENV_ACCESS_RE = re.compile(r"\bprocess\.env\.\w+")
_ENV_ACCESSORS: tuple[str, ...] = ("process.env", "Bun.env")

DEFAULT_SCHEMA_LIBRARIES: tuple[str, ...] = ("zod", "valibot", "yup", "joi")


class HardcodedConfigRule(BaseRule):
    name = "Configuration Management"
    description = "Detects hardcoded secrets and hosts, and environment reads that bypass schema validation."
    comment_style = CommentStyle.STRICT

    def __init__(self, schema_libraries: Iterable[str] | None = None) -> None:
        libs = tuple(schema_libraries) if schema_libraries is not None else DEFAULT_SCHEMA_LIBRARIES
        self.schema_libraries = libs
        self._schema_re = (
            re.compile(r"\b(?:" + "|".join(re.escape(lib) for lib in libs) + r")\b") if libs else None
        )

    def checks(self) -> list[Check]:
        return [
            LineRegexCheck(
                pattern=_HARDCODED_RE,
                unless=_ENV_ACCESSORS,
                message="Hardcoded configuration value detected",
                suggestion="Read the value from process.env (or Bun.env) and keep it out of source control.",
            ),
            LineRegexCheck(
                pattern=_ENV_ACCESS_RE,
                unless=("?.",),
                applies_to=lambda file, content: not self.uses_schema_library(content),
                message="Environment variable accessed without validation",
                suggestion="Parse process.env through a schema (e.g. zod) or use optional chaining with a default.",
            ),
        ]

    def uses_schema_library(self, content: str) -> bool:
        return bool(self._schema_re and self._schema_re.search(content))
