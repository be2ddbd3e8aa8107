"""Rule: Detect deprecated Node-era APIs and non-ESM package manifests."""
from __future__ import annotations
import re
from goldenlint.rules.base_rule import BaseRule, Check, CommentStyle, FileCheck, LineLiteralCheck
from goldenlint.rules.paths import PathClassifier

__all__ = ["DeprecatedPatternRule", "DEPRECATED_PATTERNS"]

DEPRECATED_PATTERNS: dict[str, str] = {
    "require(": "Use ES module `import` syntax.",
    "module.exports": "Use `export` / `export default`.",
    "__dirname": "Use `import.meta.dir`.",
    "__filename": "Use `import.meta.path`.",
    "new Buffer(": "Use `Buffer.from()` or `Buffer.alloc()`.",
    "fs.exists(": "Use `Bun.file(path).exists()` or `fs.promises.access()`.",
    "url.parse(": "Use the WHATWG `new URL()` constructor.",
    "process.binding(": "Use the public module APIs instead of internal bindings.",
}

_MODULE_TYPE_RE = re.compile(r"\"type\"\s*:\s*\"module\"")


class DeprecatedPatternRule(BaseRule):
    name = "Stay Updated"
    description = "Detects deprecated APIs and package manifests that do not declare ES module type."
    comment_style = CommentStyle.STRICT

    def __init__(self, paths: PathClassifier | None = None) -> None:
        self.paths = paths or PathClassifier()

    def checks(self) -> list[Check]:
        table: list[Check] = [
            LineLiteralCheck(
                needle=needle,
                message=f"Deprecated pattern '{needle}' found",
                suggestion=replacement,
            )
            for needle, replacement in DEPRECATED_PATTERNS.items()
        ]
        table.append(FileCheck(
            requirement=lambda content: bool(_MODULE_TYPE_RE.search(content)),
            applies_to=lambda file, content: self.paths.is_manifest(file),
            message='package.json missing "type": "module"',
            suggestion='Add "type": "module" so Bun and Node treat .js files as ES modules.',
        ))
        return table
