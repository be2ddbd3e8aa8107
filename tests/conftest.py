"""Shared pytest fixtures for the goldenlint test suite."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from goldenlint.config.settings import GoldenLintSettings

WORKER_SOURCE = textwrap.dedent("""\
    import { join } from "path";

    const pool = new Worker('worker.js');
    const fast = new Worker('fast.js', { smol: true });
""")

SERVER_SOURCE = textwrap.dedent("""\
    const db = Bun.sql;
    Bun.serve({ port: 3000, fetch: handler });
""")

CONFIG_SOURCE = textwrap.dedent("""\
    const password = 'abc123';
    const apiKey = "sk_live_123";
    const port = process.env.PORT;
    // const token = 'commented-out';
""")

LEGACY_SOURCE = textwrap.dedent("""\
    const fs = require('fs');
    module.exports = { root: __dirname };
""")

PACKAGE_JSON = textwrap.dedent("""\
    {
      "name": "demo",
      "scripts": { "test": "bun test" },
      "dependencies": {}
    }
""")

PACKAGE_JSON_ESM = textwrap.dedent("""\
    {
      "name": "demo",
      "type": "module",
      "scripts": {
        "dev": "bun --hot src/index.ts",
        "start": "bun --smol src/index.ts"
      }
    }
""")


@pytest.fixture
def default_settings() -> GoldenLintSettings:
    return GoldenLintSettings()


@pytest.fixture
def tmp_bun_project(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "worker.ts").write_text(WORKER_SOURCE)
    (src / "config.ts").write_text(CONFIG_SOURCE)
    (src / "legacy.js").write_text(LEGACY_SOURCE)
    (src / "README.md").write_text("require( is fine in prose\n")
    server = tmp_path / "server"
    server.mkdir()
    (server / "db.ts").write_text(SERVER_SOURCE)
    modules = tmp_path / "node_modules" / "dep"
    modules.mkdir(parents=True)
    (modules / "index.js").write_text(LEGACY_SOURCE)
    (tmp_path / "package.json").write_text(PACKAGE_JSON)
    return tmp_path


@pytest.fixture
def tmp_clean_project(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "index.ts").write_text("export const answer = 42;\n")
    (tmp_path / "package.json").write_text(PACKAGE_JSON_ESM)
    return tmp_path
