#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import TypeGuard

import yaml


REPO_ROOT = Path(__file__).resolve().parents[1]
CODES_REL = Path("services") / "bob" / "src" / "bob" / "diagnostics" / "codes.yaml"
REQUIRED_FIELDS = ("code", "severity", "rule")


def _is_dict(value: object) -> TypeGuard[dict[object, object]]:
    return isinstance(value, dict)


def _as_dict(value: object) -> dict[str, object]:
    if not _is_dict(value):
        return {}
    return {str(k): v for k, v in value.items()}


def _cell(item: dict[str, object], key: str) -> str:
    return str(item.get(key) or "").strip().replace("\n", " ").replace("|", "\\|")


def load_codes(src: Path) -> list[dict[str, object]]:
    if not src.exists():
        raise SystemExit(f"Diagnostics source not found: {src}")
    data = _as_dict(yaml.safe_load(src.read_text(encoding="utf-8")) or {})
    if data.get("version") != 1:
        raise SystemExit(f"Unsupported diagnostics version: {data.get('version')}")
    raw_codes = data.get("codes")
    if not isinstance(raw_codes, list):
        raise SystemExit("Invalid codes.yaml: expected top-level 'codes' list")
    codes: list[dict[str, object]] = []
    for entry in raw_codes:
        if not _is_dict(entry):
            raise SystemExit("Invalid codes.yaml: entries must be mappings")
        item = _as_dict(entry)
        if not all(_cell(item, key) for key in REQUIRED_FIELDS):
            raise SystemExit(f"Invalid diagnostic entry (missing required fields): {item}")
        codes.append(item)
    return codes


def render(codes: list[dict[str, object]]) -> str:
    lines = [
        "> **Generated file. Do not edit directly.**",
        "> Run: `python scripts/generate_diagnostic_codes.py`",
        "",
        "# Diagnostic codes",
        "",
        f"This page is generated from `{CODES_REL.as_posix()}`.",
        "",
        "| Code | Severity | Rule | Message | Hint |",
        "|---|---|---|---|---|",
    ]
    for item in sorted(codes, key=lambda x: _cell(x, "code")):
        lines.append(
            f"| `{_cell(item, 'code')}` | `{_cell(item, 'severity')}` "
            f"| `{_cell(item, 'rule')}` | {_cell(item, 'message')} | {_cell(item, 'hint')} |"
        )
    return "\n".join(lines) + "\n"


def generate(repo_root: Path = REPO_ROOT) -> Path:
    codes = load_codes(repo_root / CODES_REL)
    out = repo_root / "docs" / "reference" / "diagnostic-codes.md"
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render(codes), encoding="utf-8")
    print(f"Generated {out}")
    return out


if __name__ == "__main__":
    generate()
