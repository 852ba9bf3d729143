"""Shared pytest fixtures for the Monkey test suite."""

from __future__ import annotations

import pytest


@pytest.fixture
def tmp_project(tmp_path):
    """Create a minimal monkey project in a temp dir."""
    (tmp_path / "monkey.toml").write_text(
        '[project]\nname = "testproj"\nsrc = "src"\n'
        "[diagnostics]\ncolor = false\n"
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.mk").write_text("let x = 5;\nif (x < 10) { x } else { 10 }\n")
    return tmp_path
