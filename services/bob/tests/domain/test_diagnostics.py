from bob.domain.diagnostics import Diagnostic, FileLocation, Severity, has_errors


def test_diagnostic_id_is_deterministic():
    d1 = Diagnostic(code="X", rule="r", severity=Severity.ERROR, message="m", location=FileLocation("a.bob"))
    d2 = Diagnostic(code="X", rule="r", severity=Severity.ERROR, message="m", location=FileLocation("a.bob"))
    assert d1.id == d2.id


def test_render_includes_severity_code_and_hint():
    d = Diagnostic(code="X", rule="r", severity=Severity.WARN, message="m", hint="h")
    assert d.render() == "warn: X: m (hint: h)"


def test_has_errors():
    warn = Diagnostic(code="W", rule="r", severity=Severity.WARN, message="m")
    err = Diagnostic(code="E", rule="r", severity=Severity.ERROR, message="m")
    assert not has_errors([warn])
    assert has_errors([warn, err])
