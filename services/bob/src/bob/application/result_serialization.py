from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone

from bob.domain.capture import CommandRun
from bob.domain.diagnostics import Diagnostic, Location
from bob.domain.json_types import JsonDict, as_json_dict
from bob.domain.result import Result

RESULT_SCHEMA_VERSION = 1


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _serialize_location(location: Location | None) -> JsonDict | None:
    if location is None:
        return None
    if is_dataclass(location):
        return as_json_dict(asdict(location))
    return as_json_dict({"kind": str(getattr(location, "kind", "unknown"))})


def serialize_diagnostic(diag: Diagnostic) -> JsonDict:
    return as_json_dict(
        {
            "id": diag.id,
            "code": diag.code,
            "rule": diag.rule,
            "severity": diag.severity.value,
            "message": diag.message,
            "hint": diag.hint,
            "details": diag.details,
            "is_execution": diag.is_execution,
            "location": _serialize_location(diag.location),
        }
    )


def serialize_child(run: CommandRun | None) -> JsonDict | None:
    if run is None:
        return None
    outcome = run.outcome
    return as_json_dict(
        {
            "program": run.command.program_name,
            "arguments": list(run.command.arguments),
            "exit_status": outcome.exit_status,
            "stdout": _decode(outcome.output.stdout),
            "stderr": _decode(outcome.output.stderr),
            "read_errors": outcome.read_errors,
        }
    )


def serialize_run(result: Result[CommandRun], args: list[str]) -> JsonDict:
    return as_json_dict(
        {
            "result_schema_version": RESULT_SCHEMA_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "command": "run",
            "args": args,
            "exit_code": result.exit_code,
            "child": serialize_child(result.value),
            "diagnostics": [serialize_diagnostic(d) for d in result.diagnostics],
        }
    )
