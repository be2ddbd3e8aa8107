"""Tests for the goldenlint orchestration engine."""
from __future__ import annotations
import os
from pathlib import Path
import pytest
from goldenlint.config.settings import GoldenLintSettings
from goldenlint.core.engine import LintEngine, LintResult
from goldenlint.rules.base_rule import RuleViolation, ViolationSeverity


class TestDiscovery:
    def test_discovers_sources_and_manifest(self, tmp_bun_project) -> None:
        files = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).discover_files()
        rel = [f.relative_to(tmp_bun_project).as_posix() for f in files]
        assert rel == ["package.json", "server/db.ts", "src/config.ts", "src/legacy.js", "src/worker.ts"]

    def test_excluded_dirs_are_skipped(self, tmp_bun_project) -> None:
        files = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).discover_files()
        assert not any("node_modules" in f.parts for f in files)

    def test_nested_excluded_dirs_are_pruned(self, tmp_bun_project) -> None:
        nested = tmp_bun_project / "packages" / "ui" / "node_modules" / "lib"
        nested.mkdir(parents=True)
        (nested / "index.ts").write_text("const fs = require('fs');\n")
        (tmp_bun_project / "src" / "dist").mkdir()
        (tmp_bun_project / "src" / "dist" / "bundle.js").write_text("module.exports = {};\n")
        (tmp_bun_project / "packages" / "ui" / "button.ts").write_text("export const b = 1;\n")
        files = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).discover_files()
        rel = [f.relative_to(tmp_bun_project).as_posix() for f in files]
        assert "packages/ui/button.ts" in rel
        assert not any("node_modules" in r or "/dist/" in r for r in rel)

    def test_walk_never_enters_excluded_dirs(self, tmp_bun_project, monkeypatch) -> None:
        visited: list[str] = []
        real_walk = os.walk

        def recording_walk(top, *args, **kwargs):
            for entry in real_walk(top, *args, **kwargs):
                visited.append(Path(entry[0]).name)
                yield entry

        monkeypatch.setattr(os, "walk", recording_walk)
        LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).discover_files()
        assert "node_modules" not in visited and "dep" not in visited

    def test_explicit_directory_prunes_excluded(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint([tmp_bun_project])
        assert r.files_scanned == 5

    def test_custom_extensions(self, tmp_bun_project) -> None:
        s = GoldenLintSettings(extensions=[".md"], manifest_names=[])
        files = LintEngine(settings=s, root_dir=tmp_bun_project).discover_files()
        assert [f.name for f in files] == ["README.md"]

    def test_empty_dir(self, tmp_path) -> None:
        assert LintEngine(settings=GoldenLintSettings(), root_dir=tmp_path).discover_files() == []


class TestRunLint:
    def test_counts_and_file_ids(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint()
        assert r.files_scanned == 5 and len(r.violations) == 10
        assert {v.file for v in r.violations} == {
            "package.json", "server/db.ts", "src/config.ts", "src/legacy.js", "src/worker.ts",
        }

    def test_per_rule_counts(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint()
        counts: dict[str, int] = {}
        for v in r.violations:
            counts[v.rule] = counts.get(v.rule, 0) + 1
        assert counts == {"Bun Optimizations": 3, "Configuration Management": 3, "Stay Updated": 4}

    def test_rule_timings_recorded_per_run(self, tmp_bun_project) -> None:
        engine = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project)
        first, second = engine.run_lint(), engine.run_lint()
        assert set(first.rule_timings) == {"Bun Optimizations", "Configuration Management", "Stay Updated"}
        assert first.rule_timings is not second.rule_timings

    def test_explicit_paths(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint([Path("src/legacy.js")])
        assert r.files_scanned == 1 and len(r.violations) == 3
        assert all(v.file == "src/legacy.js" for v in r.violations)

    def test_explicit_directory(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint([Path("src")])
        assert r.files_scanned == 3

    def test_missing_file_is_skipped(self, tmp_bun_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_bun_project).run_lint([Path("src/missing.ts")])
        assert r.files_scanned == 0 and r.violations == []

    def test_disabled_rules(self, tmp_bun_project) -> None:
        s = GoldenLintSettings(rules={"bun_optimizations": False, "stay_updated": False})
        r = LintEngine(settings=s, root_dir=tmp_bun_project).run_lint()
        assert {v.rule for v in r.violations} == {"Configuration Management"}

    def test_server_markers_from_settings(self, tmp_bun_project) -> None:
        s = GoldenLintSettings(server_path_markers=["backend"])
        r = LintEngine(settings=s, root_dir=tmp_bun_project).run_lint()
        assert not any(v.file == "server/db.ts" for v in r.violations)

    def test_clean_project(self, tmp_clean_project) -> None:
        r = LintEngine(settings=GoldenLintSettings(), root_dir=tmp_clean_project).run_lint()
        assert r.violations == [] and r.exit_code == 0


class TestLintResult:
    def _result(self, *severities: ViolationSeverity, fail_on: str = "warning") -> LintResult:
        return LintResult(
            violations=[RuleViolation(rule="r", file="f", message="m", severity=s) for s in severities],
            fail_on=fail_on,
        )

    @pytest.mark.parametrize("severities, fail_on, expected", [
        ((), "warning", 0),
        ((ViolationSeverity.WARNING,), "warning", 1),
        ((ViolationSeverity.WARNING,), "error", 0),
        ((ViolationSeverity.ERROR,), "error", 1),
        ((ViolationSeverity.ERROR,), "never", 0),
    ])
    def test_exit_code(self, severities, fail_on: str, expected: int) -> None:
        assert self._result(*severities, fail_on=fail_on).exit_code == expected

    def test_to_dict(self) -> None:
        d = self._result(ViolationSeverity.WARNING, ViolationSeverity.ERROR).to_dict()
        assert d["summary"] == {"total": 2, "warning": 1, "error": 1}
        assert d["violations"][0]["severity"] == "warning"

    def test_by_file_groups_in_order(self) -> None:
        r = LintResult(violations=[
            RuleViolation(rule="r", file="b", message="1"),
            RuleViolation(rule="r", file="a", message="2"),
            RuleViolation(rule="r", file="b", message="3"),
        ])
        assert {k: [v.message for v in vs] for k, vs in r.by_file().items()} == {"b": ["1", "3"], "a": ["2"]}
        assert list(r.by_file()) == ["b", "a"]
