"""Tests for the markdown triage reports."""
from __future__ import annotations
from datetime import datetime, timezone
import pytest
from goldenlint.core.reports import (
    REPORT_FILES, overall_assessment, render_action_plan, render_critical,
    render_detailed, render_executive_summary, render_quick_wins, risk_level, write_reports,
)
from goldenlint.core.triage import Triager
from goldenlint.rules.base_rule import RuleViolation, ViolationSeverity

STAMP = "2026-01-02T03:04:05+00:00"


def _v(rule: str, message: str, severity: ViolationSeverity = ViolationSeverity.WARNING,
       line: int | None = 1, suggestion: str | None = None) -> RuleViolation:
    return RuleViolation(rule=rule, file="src/a.ts", message=message, severity=severity, line=line, suggestion=suggestion)


@pytest.fixture
def summary():
    return Triager().summarize([
        _v("Configuration Management", "Hardcoded configuration value detected",
           severity=ViolationSeverity.ERROR, suggestion="Read it from process.env"),
        _v("Stay Updated", "Deprecated pattern 'require(' found", line=3),
        _v("Stay Updated", 'package.json missing "type": "module"', line=None),
        _v("Bun Optimizations", "Worker created without smol optimization", line=7),
    ])


class TestExecutiveSummary:
    def test_overview_counts(self, summary) -> None:
        text = render_executive_summary(summary, STAMP)
        assert text.startswith("# Violations Executive Summary")
        assert f"**Generated**: {STAMP}" in text
        assert "**Total Violations**: 4" in text
        assert "| Critical Issues | 1 |" in text
        assert "| Errors | 1 |" in text and "| Warnings | 3 |" in text
        assert "| Quick Wins | 1 |" in text

    def test_top_rules_and_risk(self, summary) -> None:
        text = render_executive_summary(summary, STAMP)
        assert "| Stay Updated | 2 |" in text
        assert "| security | 1 | High |" in text
        assert "## Overall Assessment: ATTENTION NEEDED" in text

    def test_empty_summary_is_healthy(self) -> None:
        assert "## Overall Assessment: HEALTHY" in render_executive_summary(Triager().summarize([]), STAMP)


class TestAssessment:
    @pytest.mark.parametrize("category, count, expected", [
        ("security", 1, "High"),
        ("security", 0, "Low"),
        ("performance", 6, "Medium"),
        ("performance", 5, "Low"),
        ("compatibility", 50, "Low"),
    ])
    def test_risk_level(self, category: str, count: int, expected: str) -> None:
        assert risk_level(category, count) == expected

    def test_many_critical_is_blocking(self) -> None:
        s = Triager().summarize([
            _v("Configuration Management", "x", severity=ViolationSeverity.ERROR) for _ in range(11)
        ])
        assert overall_assessment(s)[0] == "CRITICAL"


class TestItemReports:
    def test_critical_lists_location_and_suggestion(self, summary) -> None:
        text = render_critical(summary, STAMP)
        assert "**Critical Issues**: 1" in text
        assert "### 1. Configuration Management" in text
        assert "**File**: `src/a.ts:1`" in text
        assert "**Effort**: complex" in text
        assert "**Suggestion**: Read it from process.env" in text

    def test_critical_empty(self) -> None:
        assert "No critical issues found." in render_critical(Triager().summarize([]), STAMP)

    def test_quick_wins(self, summary) -> None:
        text = render_quick_wins(summary, STAMP)
        assert "**Quick Wins**: 1" in text
        assert "Deprecated pattern 'require(' found" in text
        assert "**File**: `src/a.ts:3`" in text
        assert "Worker created" not in text

    def test_detailed_groups_by_category(self, summary) -> None:
        text = render_detailed(summary, STAMP)
        assert "## COMPATIBILITY (2 violations)" in text
        assert "## SECURITY (1 violations)" in text
        assert "**File**: `src/a.ts`" in text
        assert "- Quick: 1" in text

    def test_action_plan(self, summary) -> None:
        text = render_action_plan(summary, STAMP)
        assert "**Target**: 1 critical violations" in text
        assert "- Fix: Read it from process.env" in text
        assert "**Target**: 2 remaining violations" in text


class TestWriteReports:
    def test_writes_every_report(self, summary, tmp_path) -> None:
        out = tmp_path / "nested" / "reports"
        written = write_reports(summary, out, generated=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        assert set(written) == set(REPORT_FILES)
        assert sorted(p.name for p in out.iterdir()) == sorted(REPORT_FILES.values())
        assert f"**Generated**: {STAMP}" in written["summary"].read_text(encoding="utf-8")
