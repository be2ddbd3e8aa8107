"""Orchestration engine – ties file discovery, rules and results together."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Iterable, Iterator

from goldenlint.config.settings import GoldenLintSettings
from goldenlint.rules.base_rule import BaseRule, RuleViolation, ViolationSeverity
from goldenlint.rules.registry import enabled_rules

__all__ = ["LintEngine", "LintResult"]

logger = logging.getLogger(__name__)

_FAIL_THRESHOLD: dict[str, int | None] = {
    "warning": ViolationSeverity.WARNING.rank,
    "error": ViolationSeverity.ERROR.rank,
    "never": None,
}


class LintResult:
    def __init__(
        self,
        violations: list[RuleViolation],
        files_scanned: int = 0,
        rule_timings: dict[str, float] | None = None,
        fail_on: str = "warning",
    ) -> None:
        self.violations = violations
        self.files_scanned = files_scanned
        self.rule_timings = rule_timings or {}
        self.fail_on = fail_on

    @property
    def has_errors(self) -> bool:
        return any(v.severity is ViolationSeverity.ERROR for v in self.violations)

    @property
    def has_warnings(self) -> bool:
        return any(v.severity is ViolationSeverity.WARNING for v in self.violations)

    def count(self, severity: ViolationSeverity) -> int:
        return sum(1 for v in self.violations if v.severity is severity)

    def by_file(self) -> dict[str, list[RuleViolation]]:
        grouped: dict[str, list[RuleViolation]] = {}
        for v in self.violations:
            grouped.setdefault(v.file, []).append(v)
        return grouped

    @property
    def exit_code(self) -> int:
        threshold = _FAIL_THRESHOLD[self.fail_on]
        if threshold is None:
            return 0
        if any(v.severity.rank >= threshold for v in self.violations):
            return 1
        return 0

    def to_dict(self) -> dict[str, object]:
        return {
            "files_scanned": self.files_scanned,
            "violations": [v.to_dict() for v in self.violations],
            "summary": {
                "total": len(self.violations),
                "warning": self.count(ViolationSeverity.WARNING),
                "error": self.count(ViolationSeverity.ERROR),
            },
        }


class LintEngine:
    """Central orchestrator for all goldenlint operations."""

    def __init__(self, settings: GoldenLintSettings, root_dir: Path | None = None) -> None:
        self.settings = settings
        self.root_dir = (root_dir or Path.cwd()).resolve()
        self._rules: list[BaseRule] = enabled_rules(settings)

    @property
    def rules(self) -> list[BaseRule]:
        return list(self._rules)

    def _is_candidate(self, path: Path) -> bool:
        if path.name in self.settings.manifest_names:
            return True
        return path.suffix in self.settings.extensions

    def _walk(self, top: Path) -> list[Path]:
        """Collect candidate files under *top*, pruning excluded directories in place."""
        found: list[Path] = []
        excluded = set(self.settings.exclude_dirs)
        for dirpath, dirnames, filenames in os.walk(top):
            dirnames[:] = [d for d in dirnames if d not in excluded]
            for name in filenames:
                path = Path(dirpath) / name
                if self._is_candidate(path):
                    found.append(path)
        return sorted(found)

    def discover_files(self) -> list[Path]:
        return self._walk(self.root_dir)

    def _expand(self, paths: Iterable[Path]) -> Iterator[Path]:
        for raw in paths:
            path = raw if raw.is_absolute() else self.root_dir / raw
            if path.is_dir():
                yield from self._walk(path)
            else:
                yield path

    def file_id(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def lint_content(self, file: str, content: str, timings: dict[str, float] | None = None) -> list[RuleViolation]:
        violations: list[RuleViolation] = []
        for rule in self._rules:
            started = time.perf_counter()
            violations.extend(rule.validate(file, content))
            if timings is not None:
                timings[rule.name] = timings.get(rule.name, 0.0) + time.perf_counter() - started
        return violations

    def run_lint(self, paths: Iterable[Path] | None = None) -> LintResult:
        targets = list(self._expand(paths)) if paths else self.discover_files()
        violations: list[RuleViolation] = []
        timings: dict[str, float] = {rule.name: 0.0 for rule in self._rules}
        scanned = 0
        for path in targets:
            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError:
                logger.warning("Failed to read %s – skipping", path, exc_info=True)
                continue
            scanned += 1
            violations.extend(self.lint_content(self.file_id(path), content, timings))
        logger.debug("Linted %d file(s) with %d rule(s)", scanned, len(self._rules))
        return LintResult(
            violations=violations, files_scanned=scanned,
            rule_timings=timings, fail_on=self.settings.fail_on,
        )

    def run_check_file(self, path: Path) -> LintResult:
        return self.run_lint([path])
