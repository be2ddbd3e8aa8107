"""Markdown triage reports written by ``goldenlint triage --output-dir``."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from goldenlint.core.triage import Category, Effort, Priority, TriagedViolation, TriageSummary

__all__ = [
    "REPORT_FILES",
    "render_executive_summary",
    "render_critical",
    "render_quick_wins",
    "render_detailed",
    "render_action_plan",
    "write_reports",
    "risk_level",
    "overall_assessment",
]

logger = logging.getLogger(__name__)

REPORT_FILES: dict[str, str] = {
    "summary": "violations-executive-summary.md",
    "critical": "violations-critical.md",
    "quick_wins": "violations-quick-wins.md",
    "detailed": "violations-detailed.md",
    "action_plan": "violations-action-plan.md",
}

# More critical violations than this blocks feature work.
CRITICAL_BLOCK_THRESHOLD = 10
PERFORMANCE_RISK_THRESHOLD = 5


def _cell(text: object) -> str:
    return str(text).replace("|", "\\|").replace("\n", " ")


def _location(item: TriagedViolation) -> str:
    v = item.violation
    return f"{v.file}:{v.line}" if v.line is not None else v.file


def _header(title: str, generated: str, label: str, count: int) -> list[str]:
    return [f"# {title}", "", f"**Generated**: {generated}", f"**{label}**: {count}", ""]


def risk_level(category: str, count: int) -> str:
    if category == Category.SECURITY.value and count > 0:
        return "High"
    if category == Category.PERFORMANCE.value and count > PERFORMANCE_RISK_THRESHOLD:
        return "Medium"
    return "Low"


def overall_assessment(summary: TriageSummary) -> tuple[str, str]:
    """Return ``(verdict, recommended action)`` for the run."""
    critical = len(summary.critical)
    if critical > CRITICAL_BLOCK_THRESHOLD:
        return "CRITICAL", "Stop new feature work until the critical issues are resolved."
    if critical > 0:
        return "ATTENTION NEEDED", "Prioritise the critical fixes in the current sprint."
    return "HEALTHY", "Address the remaining warnings in the next maintenance cycle."


def render_executive_summary(summary: TriageSummary, generated: str) -> str:
    sev = summary.by_severity
    lines = _header("Violations Executive Summary", generated, "Total Violations", summary.total)
    lines += [
        "## Overview",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Critical Issues | {len(summary.critical)} |",
        f"| Errors | {sev['error']} |",
        f"| Warnings | {sev['warning']} |",
        f"| Quick Wins | {len(summary.quick_wins)} |",
        "",
        "## Top Rules",
        "",
        "| Rule | Violations |",
        "|------|------------|",
    ]
    lines += [f"| {_cell(rule)} | {count} |" for rule, count in summary.top_rules(5)]
    lines += ["", "## Impact Assessment", "", "| Category | Violations | Risk Level |", "|----------|------------|------------|"]
    lines += [
        f"| {category} | {count} | {risk_level(category, count)} |"
        for category, count in sorted(summary.by_category.items())
    ]
    verdict, action = overall_assessment(summary)
    lines += ["", f"## Overall Assessment: {verdict}", "", f"**Recommended Action**: {action}", ""]
    return "\n".join(lines)


def _item_block(index: int, item: TriagedViolation, *fields: str) -> list[str]:
    v = item.violation
    lines = [f"### {index}. {v.rule}", "", f"**File**: `{_location(item)}`"]
    for name in fields:
        lines.append(f"**{name.title()}**: {getattr(item, name).value}")
    lines += ["", f"**Issue**: {v.message}", ""]
    if v.suggestion:
        lines += [f"**Suggestion**: {v.suggestion}", ""]
    lines += ["---", ""]
    return lines


def render_critical(summary: TriageSummary, generated: str) -> str:
    critical = summary.critical
    lines = _header("Critical Issues Report", generated, "Critical Issues", len(critical))
    lines += ["## Immediate Action Required", ""]
    if not critical:
        lines += ["No critical issues found.", ""]
    for i, item in enumerate(critical, start=1):
        lines += _item_block(i, item, "category", "effort")
    return "\n".join(lines)


def render_quick_wins(summary: TriageSummary, generated: str) -> str:
    wins = summary.quick_wins
    lines = _header("Quick Wins Report", generated, "Quick Wins", len(wins))
    lines += ["## Low-Effort Fixes", ""]
    if not wins:
        lines += ["No quick wins available.", ""]
    for i, item in enumerate(wins, start=1):
        lines += _item_block(i, item, "category", "priority")
    return "\n".join(lines)


def render_detailed(summary: TriageSummary, generated: str) -> str:
    grouped: dict[str, list[TriagedViolation]] = {}
    for item in summary.items:
        grouped.setdefault(item.category.value, []).append(item)

    lines = _header("Detailed Violations Report", generated, "Total Violations", summary.total)
    for category, items in grouped.items():
        lines += [f"## {category.upper()} ({len(items)} violations)", "", "### Priority Breakdown", ""]
        lines += [f"- {p.value.title()}: {sum(1 for i in items if i.priority is p)}" for p in Priority]
        lines += ["", "### Effort Breakdown", ""]
        lines += [f"- {e.value.title()}: {sum(1 for i in items if i.effort is e)}" for e in Effort]
        lines += ["", "### Violations", ""]
        for n, item in enumerate(items, start=1):
            v = item.violation
            lines += [
                f"#### {n}. {v.rule} ({v.severity.value})",
                "",
                f"**File**: `{_location(item)}`",
                f"**Priority**: {item.priority.value}",
                f"**Effort**: {item.effort.value}",
                f"**Issue**: {v.message}",
                "",
            ]
    return "\n".join(lines)


def _remaining(summary: TriageSummary) -> int:
    return sum(
        1 for i in summary.items
        if i.priority is not Priority.CRITICAL and i.effort is not Effort.QUICK
    )


def render_action_plan(summary: TriageSummary, generated: str) -> str:
    lines = _header("Violations Action Plan", generated, "Total Violations", summary.total)
    lines += [
        "## Phase 1: Critical Security & Stability",
        "",
        f"**Target**: {len(summary.critical)} critical violations",
        "",
    ]
    for i, item in enumerate(summary.critical[:5], start=1):
        v = item.violation
        lines += [f"{i}. **{v.rule}** - `{v.file}`", f"   - Fix: {v.suggestion or v.message}", f"   - Effort: {item.effort.value}"]
    lines += [
        "",
        "## Phase 2: Quick Wins",
        "",
        f"**Target**: {len(summary.quick_wins)} quick fixes",
        "",
        "- Replace `require()` with ES module imports",
        "- Add Bun optimization flags to scripts and server entry points",
        "",
        "## Phase 3: Systematic Improvements",
        "",
        f"**Target**: {_remaining(summary)} remaining violations",
        "",
    ]
    lines += [f"- {_cell(rule)}: {count}" for rule, count in summary.top_rules(limit=len(summary.by_rule))]
    lines.append("")
    return "\n".join(lines)


_RENDERERS = {
    "summary": render_executive_summary,
    "critical": render_critical,
    "quick_wins": render_quick_wins,
    "detailed": render_detailed,
    "action_plan": render_action_plan,
}


def write_reports(
    summary: TriageSummary,
    output_dir: Path,
    generated: datetime | None = None,
) -> dict[str, Path]:
    """Render every report into *output_dir* and return the written paths by key."""
    stamp = (generated or datetime.now(timezone.utc)).isoformat()
    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for key, filename in REPORT_FILES.items():
        path = output_dir / filename
        path.write_text(_RENDERERS[key](summary, stamp), encoding="utf-8")
        written[key] = path
    logger.debug("Wrote %d triage report(s) to %s", len(written), output_dir)
    return written
