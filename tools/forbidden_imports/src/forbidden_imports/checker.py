from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import ast
import fnmatch
import os

import yaml

SKIP_DIRS = {".git", ".venv", "venv", "node_modules", "__pycache__", "build", "dist"}


@dataclass(frozen=True)
class LayerRule:
    name: str
    include: list[str]
    deny: list[str]


@dataclass(frozen=True)
class Config:
    extensions: list[str]
    layers: list[LayerRule]


def _str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


def load_config(path: Path) -> Config:
    data = yaml.safe_load(path.read_text()) or {}
    extensions = _str_list(data.get("extensions")) or [".py"]
    layers: list[LayerRule] = []
    raw_layers = data.get("layers") or {}
    if isinstance(raw_layers, dict):
        for layer_name, rules in raw_layers.items():
            if not isinstance(rules, dict):
                continue
            layers.append(
                LayerRule(
                    name=str(layer_name),
                    include=_str_list(rules.get("include")),
                    deny=_str_list(rules.get("deny")),
                )
            )
    return Config(extensions=extensions, layers=layers)


def find_repo_root(start: Path | None = None) -> Path:
    override = os.environ.get("BOB_REPO_ROOT")
    if override:
        return Path(override)
    cwd = (start or Path.cwd()).resolve()
    for parent in (cwd, *cwd.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return cwd


def _matches_any(path: Path, patterns: list[str]) -> bool:
    rel = path.as_posix()
    return any(
        fnmatch.fnmatch(rel, pattern) or fnmatch.fnmatch(rel, f"*/{pattern}")
        for pattern in patterns
    )


def _deny_hit(import_name: str, deny: list[str]) -> bool:
    return any(
        import_name == entry or import_name.startswith(entry + ".") for entry in deny
    )


def extract_imports(text: str) -> list[tuple[str, int]]:
    hits: list[tuple[str, int]] = []
    tree = ast.parse(text)
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                hits.append((alias.name, node.lineno))
        elif isinstance(node, ast.ImportFrom) and node.module:
            hits.append((node.module, node.lineno))
    return hits


def scan_files(config: Config, files: list[Path]) -> list[str]:
    violations: list[str] = []
    extensions = set(config.extensions)
    for file in files:
        if file.suffix not in extensions:
            continue
        layers = [layer for layer in config.layers if _matches_any(file, layer.include)]
        if not layers:
            continue
        imports = extract_imports(file.read_text())
        for layer in layers:
            for name, lineno in imports:
                if _deny_hit(name, layer.deny):
                    violations.append(
                        f"{file}:{lineno} forbidden import '{name}' in layer {layer.name}"
                    )
    return violations


def scan_tree(config: Config, root: Path) -> list[str]:
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        files.extend(Path(dirpath) / name for name in filenames)
    return scan_files(config, sorted(files))
