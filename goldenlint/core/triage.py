"""Violation triage: priority, effort and category classification for goldenlint."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field

from goldenlint.rules.base_rule import RuleViolation, ViolationSeverity

__all__ = ["Priority", "Effort", "Category", "TriagedViolation", "TriageSummary", "Triager"]


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(str, Enum):
    QUICK = "quick"
    MODERATE = "moderate"
    COMPLEX = "complex"


class Category(str, Enum):
    SECURITY = "security"
    PERFORMANCE = "performance"
    MAINTAINABILITY = "maintainability"
    COMPATIBILITY = "compatibility"
    MONITORING = "monitoring"


SECURITY_RULES: frozenset[str] = frozenset({"Configuration Management"})
MEDIUM_PRIORITY_RULES: frozenset[str] = frozenset({"Bun Optimizations"})

DEFAULT_CATEGORIES: dict[str, Category] = {
    "Configuration Management": Category.SECURITY,
    "Bun Optimizations": Category.PERFORMANCE,
    "Stay Updated": Category.COMPATIBILITY,
}

QUICK_FIX_PATTERNS: tuple[str, ...] = (
    "require(", "process.cwd()", "__dirname", "module.exports",
    "--smol", "--sql-preconnect",
)


@dataclass(frozen=True)
class TriagedViolation:
    violation: RuleViolation
    priority: Priority
    effort: Effort
    category: Category


@dataclass
class TriageSummary:
    items: list[TriagedViolation] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def by_severity(self) -> dict[str, int]:
        counts = {s.value: 0 for s in ViolationSeverity}
        for item in self.items:
            counts[item.violation.severity.value] += 1
        return counts

    def _count(self, key) -> dict[str, int]:
        counts: dict[str, int] = {}
        for item in self.items:
            k = key(item)
            counts[k] = counts.get(k, 0) + 1
        return counts

    @property
    def by_rule(self) -> dict[str, int]:
        return self._count(lambda i: i.violation.rule)

    @property
    def by_category(self) -> dict[str, int]:
        return self._count(lambda i: i.category.value)

    @property
    def by_effort(self) -> dict[str, int]:
        return self._count(lambda i: i.effort.value)

    @property
    def critical(self) -> list[TriagedViolation]:
        return [i for i in self.items if i.priority is Priority.CRITICAL]

    @property
    def quick_wins(self) -> list[TriagedViolation]:
        return [i for i in self.items if i.effort is Effort.QUICK]

    def top_rules(self, limit: int = 5) -> list[tuple[str, int]]:
        ordered = sorted(self.by_rule.items(), key=lambda kv: (-kv[1], kv[0]))
        return ordered[:limit]


class Triager:
    def __init__(self, categories: dict[str, Category] | None = None) -> None:
        self.categories = {**DEFAULT_CATEGORIES, **(categories or {})}

    def priority(self, v: RuleViolation) -> Priority:
        if v.severity is ViolationSeverity.ERROR:
            return Priority.CRITICAL if v.rule in SECURITY_RULES else Priority.HIGH
        if v.rule in MEDIUM_PRIORITY_RULES:
            return Priority.MEDIUM
        return Priority.LOW

    def effort(self, v: RuleViolation) -> Effort:
        if any(pattern in v.message for pattern in QUICK_FIX_PATTERNS):
            return Effort.QUICK
        if v.rule in SECURITY_RULES:
            return Effort.COMPLEX
        return Effort.MODERATE

    def category(self, v: RuleViolation) -> Category:
        return self.categories.get(v.rule, Category.MAINTAINABILITY)

    def triage(self, v: RuleViolation) -> TriagedViolation:
        return TriagedViolation(violation=v, priority=self.priority(v), effort=self.effort(v), category=self.category(v))

    def summarize(self, violations: list[RuleViolation]) -> TriageSummary:
        return TriageSummary(items=[self.triage(v) for v in violations])
