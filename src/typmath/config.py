"""TOML config loading for typmath.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "typmath.toml"


@dataclass
class ParserConfig:
    relations: list[str] = field(default_factory=list)


@dataclass
class DocumentConfig:
    strict: bool = True


@dataclass
class RenderConfig:
    color: bool = True
    symbols: dict[str, str] = field(default_factory=dict)


@dataclass
class TypmathConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find typmath.toml. Raises FileNotFoundError."""
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


def load_config(path: Path) -> TypmathConfig:
    """Parse a typmath.toml file into a TypmathConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = TypmathConfig()

    if "parser" in data:
        prs = data["parser"]
        config.parser = ParserConfig(
            relations=[str(r) for r in prs.get("relations", [])],
        )

    if "document" in data:
        doc = data["document"]
        config.document = DocumentConfig(
            strict=doc.get("strict", True),
        )

    if "render" in data:
        rnd = data["render"]
        config.render = RenderConfig(
            color=rnd.get("color", True),
            symbols={str(k): str(v) for k, v in rnd.get("symbols", {}).items()},
        )

    return config


def discover_config(start_path: Path | None = None) -> TypmathConfig:
    """Load the nearest typmath.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return TypmathConfig()
