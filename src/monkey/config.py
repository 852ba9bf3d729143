"""TOML config loading for monkey.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "monkey.toml"


@dataclass
class ProjectConfig:
    name: str = "untitled"
    src: str = "src"
    extensions: list[str] = field(default_factory=lambda: [".mk", ".monkey"])


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class MonkeyConfig:
    project: ProjectConfig = field(default_factory=ProjectConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find monkey.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> MonkeyConfig:
    """Parse a monkey.toml file into a MonkeyConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = MonkeyConfig()

    if "project" in data:
        proj = data["project"]
        config.project = ProjectConfig(
            name=proj.get("name", "untitled"),
            src=proj.get("src", "src"),
            extensions=proj.get("extensions", [".mk", ".monkey"]),
        )

    if "diagnostics" in data:
        diag = data["diagnostics"]
        config.diagnostics = DiagnosticsConfig(
            color=diag.get("color", True),
        )

    return config
