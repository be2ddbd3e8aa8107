"""Base rule interface, check kinds and violation model for the goldenlint engine."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

__all__ = [
    "ViolationSeverity",
    "RuleViolation",
    "CommentStyle",
    "LineLiteralCheck",
    "LineRegexCheck",
    "FileCheck",
    "Check",
    "BaseRule",
    "is_comment_line",
]

FileGate = Callable[[str, str], bool]


def _always(file: str, content: str) -> bool:
    return True


class ViolationSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return 1 if self is ViolationSeverity.ERROR else 0


@dataclass(frozen=True)
class RuleViolation:
    rule: str
    file: str
    message: str
    severity: ViolationSeverity = ViolationSeverity.WARNING
    line: int | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "rule": self.rule,
            "file": self.file,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "suggestion": self.suggestion,
        }


class CommentStyle(str, Enum):
    """How a rule decides that a line is non-executable text.

    ``LOOSE`` treats any line containing ``//`` as a comment, so a URL inside a
    string literal hides the whole line. ``STRICT`` only looks at how the
    stripped line starts. Neither is a lexer.
    """

    LOOSE = "loose"
    STRICT = "strict"


_STRICT_PREFIXES: tuple[str, ...] = ("//", "/*", "*", "import ")


def is_comment_line(line: str, style: CommentStyle) -> bool:
    if style is CommentStyle.LOOSE:
        return "//" in line
    return line.strip().startswith(_STRICT_PREFIXES)


@dataclass(frozen=True)
class LineLiteralCheck:
    needle: str
    message: str
    suggestion: str
    unless: tuple[str, ...] = ()
    applies_to: FileGate = field(default=_always, compare=False)

    def matches(self, line: str) -> bool:
        if self.needle not in line:
            return False
        return not any(token in line for token in self.unless)


@dataclass(frozen=True)
class LineRegexCheck:
    pattern: re.Pattern[str]
    message: str
    suggestion: str
    unless: tuple[str, ...] = ()
    applies_to: FileGate = field(default=_always, compare=False)

    def matches(self, line: str) -> bool:
        if not self.pattern.search(line):
            return False
        return not any(token in line for token in self.unless)


@dataclass(frozen=True)
class FileCheck:
    """Evaluated once per file; violates when ``requirement`` is unmet."""

    requirement: Callable[[str], bool]
    message: str
    suggestion: str
    applies_to: FileGate = field(default=_always, compare=False)


Check = Union[LineLiteralCheck, LineRegexCheck, FileCheck]


class BaseRule(ABC):
    name: str = "base"
    description: str = ""
    comment_style: CommentStyle = CommentStyle.LOOSE
    severity: ViolationSeverity = ViolationSeverity.WARNING

    @abstractmethod
    def checks(self) -> list[Check]:
        """Return the rule's pattern table in evaluation order."""

    def validate(self, file: str, content: str) -> list[RuleViolation]:
        """Scan ``content`` and return violations in line order, then check order."""
        if not isinstance(file, str) or not isinstance(content, str):
            raise TypeError("validate() expects str file and str content")
        if not content:
            return []
        table = self.checks()
        line_checks = [
            c for c in table
            if not isinstance(c, FileCheck) and c.applies_to(file, content)
        ]
        file_checks = [
            c for c in table
            if isinstance(c, FileCheck) and c.applies_to(file, content)
        ]
        violations: list[RuleViolation] = []
        if line_checks:
            for i, line in enumerate(content.split("\n")):
                if is_comment_line(line, self.comment_style):
                    continue
                for check in line_checks:
                    if check.matches(line):
                        violations.append(self._violation(file, check.message, check.suggestion, i + 1))
        for check in file_checks:
            if not check.requirement(content):
                violations.append(self._violation(file, check.message, check.suggestion, None))
        return violations

    def _violation(self, file: str, message: str, suggestion: str, line: int | None) -> RuleViolation:
        return RuleViolation(
            rule=self.name, file=file, message=message,
            severity=self.severity, line=line, suggestion=suggestion,
        )
