import threading

import pytest

from styleguard import engine
from styleguard.config import LintConfig, RuleOverride
from styleguard.engine import Engine, RunState
from styleguard.errors import NoInputError
from styleguard.result import FindingKind, RunStatus
from styleguard.rules import PREDICATES
from styleguard.severity import Severity


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_run_collects_findings_across_files(tmp_path):
    first = write(tmp_path / "src" / "A.swift", "var foo = 5\n")
    second = write(tmp_path / "src" / "B.swift", "let x = y!\n")
    write(tmp_path / "src" / "notes.txt", "var ignored = 1\n")

    runner = Engine()
    report = runner.run([str(tmp_path / "src")], LintConfig(workers=2))

    assert runner.state is RunState.DONE
    assert report.files_checked == 2
    assert [(f.path, f.rule_id) for f in report.findings] == [
        (first.as_posix(), "prefer-let"),
        (second.as_posix(), "no-force-unwrap"),
    ]
    assert report.summary.error == 1
    assert report.summary.warning == 1
    assert report.status is RunStatus.OK


def test_report_order_does_not_depend_on_input_order_or_workers(tmp_path):
    paths = [
        str(write(tmp_path / f"File{index}.swift", "var a = 1; var b = c!\n"))
        for index in range(6)
    ]

    forward = engine.run(paths, LintConfig(workers=1))
    backward = engine.run(list(reversed(paths)), LintConfig(workers=4))

    assert forward.findings == backward.findings
    keys = [finding.sort_key for finding in forward.findings]
    assert keys == sorted(keys)


def test_unparsable_file_does_not_hide_other_findings(tmp_path):
    broken = write(tmp_path / "Broken.swift", 'let s = "never closed\n')
    write(tmp_path / "Fine.swift", "var foo = 5\n")

    report = engine.run([str(tmp_path)])

    kinds = {finding.kind for finding in report.findings}
    assert kinds == {FindingKind.UNPARSABLE, FindingKind.VIOLATION}
    unparsable = next(f for f in report.findings if f.kind is FindingKind.UNPARSABLE)
    assert unparsable.path == broken.as_posix()
    assert (unparsable.line, unparsable.column) == (1, 9)
    assert report.exit_code() == 1


def test_missing_file_reported_as_io_error(tmp_path):
    missing = tmp_path / "Missing.swift"

    report = engine.run([str(missing)])

    [finding] = report.findings
    assert finding.kind is FindingKind.IO_ERROR
    assert finding.severity is Severity.ERROR
    assert report.files_checked == 1


def test_no_input_files_fails_the_run(tmp_path):
    runner = Engine()
    with pytest.raises(NoInputError):
        runner.run([str(tmp_path)])
    assert runner.state is RunState.FAILED


def test_matcher_fault_is_isolated_to_one_rule(tmp_path, monkeypatch):
    def explode(model):
        raise ValueError("bad matcher")

    monkeypatch.setitem(PREDICATES, "explode", explode)
    write(tmp_path / "A.swift", "var foo = 5\n")
    config = LintConfig(
        custom_rules=({"id": "fragile", "description": "Always fails", "detect": {"predicate": "explode"}},)
    )

    report = engine.run([str(tmp_path)], config)

    by_rule = {finding.rule_id: finding.kind for finding in report.findings}
    assert by_rule == {"fragile": FindingKind.MATCHER_FAULT, "prefer-let": FindingKind.VIOLATION}


def test_inline_suppressions(tmp_path):
    source = (
        "var a = 1 // styleguard:disable=prefer-let\n"
        "// styleguard:disable-next-line\n"
        "var b = c!\n"
        "var d = 2 // styleguard:disable=no-force-unwrap\n"
    )
    path = write(tmp_path / "Quiet.swift", source)

    report = engine.run([str(path)])

    assert [(f.line, f.rule_id) for f in report.findings] == [(4, "prefer-let")]


def test_overrides_and_unknown_rule_warning(tmp_path):
    path = write(tmp_path / "A.swift", "var foo = 5\nlet x = y!\n")
    config = LintConfig(
        overrides={
            "prefer-let": RuleOverride(severity=Severity.ERROR),
            "no-force-unwrap": RuleOverride(enabled=False),
            "made-up": RuleOverride(),
        }
    )

    report = engine.run([str(path)], config)

    assert [(f.path, f.rule_id, f.severity) for f in report.findings] == [
        (path.as_posix(), "prefer-let", Severity.ERROR),
        ("config", "made-up", Severity.WARNING),
    ]
    assert report.exit_code() == 1


def test_timeout_marks_unfinished_files(tmp_path, monkeypatch):
    release = threading.Event()

    def stuck(model, ruleset):
        release.wait(5)
        return []

    monkeypatch.setattr(engine, "check_model", stuck)
    path = write(tmp_path / "Slow.swift", "let a = 1\n")
    try:
        report = engine.run([str(path)], LintConfig(timeout=0.05))
    finally:
        release.set()

    assert report.status is RunStatus.TIMEOUT
    assert report.exit_code() == 2
    assert [(f.path, f.kind) for f in report.findings] == [(path.as_posix(), FindingKind.TIMEOUT)]
