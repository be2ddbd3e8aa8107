"""Rule: Flag Bun code and manifests that skip the runtime's optimisation flags."""
from __future__ import annotations
import re
from goldenlint.rules.base_rule import BaseRule, Check, CommentStyle, LineLiteralCheck, LineRegexCheck
from goldenlint.rules.paths import PathClassifier

__all__ = ["BunOptimizationsRule"]

_SQL_CLIENT_RE = re.compile(r"\bBun\.sql\b|\bnew\s+SQL\(")
_BUN_SCRIPT_RE = re.compile(r"\"[\w:.\-]+\"\s*:\s*\"bun\s")
_PRECONNECT_FLAG = "--sql-preconnect"


class BunOptimizationsRule(BaseRule):
    name = "Bun Optimizations"
    description = "Detects workers, database clients and package scripts that run without Bun's memory and startup flags."
    comment_style = CommentStyle.LOOSE

    def __init__(self, paths: PathClassifier | None = None) -> None:
        self.paths = paths or PathClassifier()

    def checks(self) -> list[Check]:
        return [
            LineLiteralCheck(
                needle="new Worker(",
                unless=("smol: true",),
                message="Worker created without smol optimization",
                suggestion="Pass { smol: true } in the Worker options to reduce per-worker memory.",
            ),
            LineRegexCheck(
                pattern=_SQL_CLIENT_RE,
                applies_to=self._server_without_preconnect,
                message=f"Database client in server file without {_PRECONNECT_FLAG}",
                suggestion=f"Start the server with `bun {_PRECONNECT_FLAG}` so the pool connects during startup.",
            ),
            LineRegexCheck(
                pattern=_BUN_SCRIPT_RE,
                unless=("--smol", "--hot"),
                applies_to=lambda file, content: self.paths.is_manifest(file),
                message="Bun script without --smol or --hot flag",
                suggestion="Add --smol for memory-constrained runs or --hot for development scripts.",
            ),
        ]

    def _server_without_preconnect(self, file: str, content: str) -> bool:
        return self.paths.is_server_file(file) and _PRECONNECT_FLAG not in content
