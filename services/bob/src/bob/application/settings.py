from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import os
import tomllib
from typing import Mapping

from bob.application.capture import DEFAULT_CHUNK_SIZE, DEFAULT_POLL_INTERVAL
from bob.domain.diagnostics import Diagnostic, FileLocation, Severity, ValueLocation
from bob.domain.json_types import JsonDict, JsonValue, as_json_dict
from bob.domain.result import Result

CONFIG_FILENAME = ".bob.toml"
ENV_PREFIX = "BOB_"
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    strict: bool = False


def find_config(start: Path | None = None) -> Path | None:
    cwd = (start or Path.cwd()).resolve()
    for parent in (cwd, *cwd.parents):
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config(path: Path | None) -> Result[JsonDict]:
    if path is None or not path.exists():
        return Result(value={})
    try:
        raw = as_json_dict(tomllib.loads(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="CONFIG_PARSE_FAILED",
                    rule="config.parse",
                    severity=Severity.ERROR,
                    message=str(e),
                    location=FileLocation(str(path)),
                )
            ]
        )
    return Result(value=as_json_dict(raw.get("settings")))


def _invalid(name: str, value: object, expected: str) -> Diagnostic:
    return Diagnostic(
        code="CONFIG_VALUE_INVALID",
        rule=f"config.{name}",
        severity=Severity.ERROR,
        message=f"Invalid {name}: {value!r} (expected {expected})",
        location=ValueLocation(name, str(value)),
    )


def _coerce_chunk_size(value: JsonValue) -> int | None:
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _coerce_poll_interval(value: JsonValue) -> float | None:
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return None
    return float(value)


def _coerce_strict(value: JsonValue) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return None


_FIELDS = {
    "chunk_size": (_coerce_chunk_size, "a positive integer"),
    "poll_interval": (_coerce_poll_interval, "a non-negative number of seconds"),
    "strict": (_coerce_strict, "a boolean"),
}


def _apply(settings: Settings, raw: Mapping[str, JsonValue], diagnostics: list[Diagnostic]) -> Settings:
    for name, (coerce, expected) in _FIELDS.items():
        if name not in raw or raw[name] is None:
            continue
        value = coerce(raw[name])
        if value is None:
            diagnostics.append(_invalid(name, raw[name], expected))
            continue
        settings = replace(settings, **{name: value})
    return settings


def _from_env(environ: Mapping[str, str]) -> dict[str, JsonValue]:
    values: dict[str, JsonValue] = {}
    for name in _FIELDS:
        key = ENV_PREFIX + name.upper()
        if key in environ:
            values[name] = environ[key]
    return values


def load_settings(
    start: Path | None = None,
    environ: Mapping[str, str] | None = None,
    *,
    chunk_size: int | None = None,
    poll_interval: float | None = None,
) -> Result[Settings]:
    """Resolve settings from defaults, .bob.toml, BOB_* variables and CLI options.

    Later sources win. Strictness from the command line is resolved separately
    with effective_strict so that an explicit --no-strict can override config.
    """
    config = read_config(find_config(start))
    diagnostics = list(config.diagnostics)
    settings = Settings()
    settings = _apply(settings, config.value or {}, diagnostics)
    settings = _apply(settings, _from_env(os.environ if environ is None else environ), diagnostics)
    settings = _apply(
        settings,
        {"chunk_size": chunk_size, "poll_interval": poll_interval},
        diagnostics,
    )
    return Result(value=settings, diagnostics=diagnostics)


def effective_strict(cli_strict: bool | None, settings: Settings | None) -> bool:
    if cli_strict is not None:
        return cli_strict
    if settings is None:
        return False
    return settings.strict
