"""Run orchestration: load rules, parse files, match, aggregate."""

from __future__ import annotations

import logging
import re
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from enum import Enum
from functools import partial
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple, TypeVar, Union

from . import rules
from .config import LintConfig
from .errors import NoInputError, ParseError, StyleguardError
from .matcher import apply
from .result import Finding, FindingKind, Report, RunStatus
from .severity import Severity
from .source import SourceModel, parse
from .utils import read_text_file, resolve_inputs

logger = logging.getLogger("styleguard.engine")

SUPPRESSION_PATTERN = re.compile(
    r"styleguard:(disable-next-line|disable)(?:=([\w\-]+(?:\s*,\s*[\w\-]+)*))?"
)

T = TypeVar("T")
R = TypeVar("R")


class RunState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PARSING = "parsing"
    MATCHING = "matching"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


def load_model(path: Path) -> Union[SourceModel, Finding]:
    """Read and tokenize one file, or return the finding explaining why not."""

    display = path.as_posix()
    try:
        text = read_text_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", display, exc)
        return Finding(
            rule_id="io-error",
            path=display,
            line=0,
            column=0,
            message=f"Cannot read file: {exc}",
            severity=Severity.ERROR,
            kind=FindingKind.IO_ERROR,
        )
    try:
        return parse(text, path=display)
    except ParseError as exc:
        logger.warning("Cannot parse %s: %s", display, exc)
        return Finding(
            rule_id="unparsable",
            path=display,
            line=exc.line,
            column=exc.column,
            message=f"File could not be parsed: {exc.message}",
            severity=Severity.ERROR,
            kind=FindingKind.UNPARSABLE,
        )


def suppressions(model: SourceModel) -> Dict[int, Optional[FrozenSet[str]]]:
    """Map line numbers to suppressed rule ids. ``None`` suppresses every rule."""

    suppressed: Dict[int, Optional[FrozenSet[str]]] = {}
    for comment in model.comments:
        for match in SUPPRESSION_PATTERN.finditer(comment.text):
            line = comment.line + (1 if match.group(1) == "disable-next-line" else 0)
            ids = frozenset(part.strip() for part in match.group(2).split(",")) if match.group(2) else None
            if line in suppressed:
                current = suppressed[line]
                ids = None if current is None or ids is None else current | ids
            suppressed[line] = ids
    return suppressed


def _is_suppressed(finding: Finding, suppressed: Dict[int, Optional[FrozenSet[str]]]) -> bool:
    if finding.kind is not FindingKind.VIOLATION or finding.line not in suppressed:
        return False
    ids = suppressed[finding.line]
    return ids is None or finding.rule_id in ids


def check_model(model: SourceModel, ruleset: rules.RuleSet) -> List[Finding]:
    """Apply every rule to ``model`` and drop inline-suppressed violations."""

    findings: List[Finding] = []
    for rule in ruleset.rules():
        findings.extend(apply(rule, model))
    suppressed = suppressions(model)
    if not suppressed:
        return findings
    return [finding for finding in findings if not _is_suppressed(finding, suppressed)]


def _gather(
    executor: ThreadPoolExecutor,
    func: Callable[[T], R],
    items: Sequence[T],
    deadline: Optional[float],
) -> Tuple[List[Optional[R]], List[int]]:
    """Run ``func`` over ``items`` on the pool and wait for all of them, or the deadline.

    Results keep input order. Unfinished items are cancelled and their indices returned.
    """

    futures: Dict[Future, int] = {executor.submit(func, item): index for index, item in enumerate(items)}
    timeout = None if deadline is None else max(0.0, deadline - time.monotonic())
    done, pending = wait(futures, timeout=timeout)
    results: List[Optional[R]] = [None] * len(items)
    for future in done:
        results[futures[future]] = future.result()
    for future in pending:
        future.cancel()
    return results, sorted(futures[future] for future in pending)


def _timeout_finding(path: str) -> Finding:
    return Finding(
        rule_id="timeout",
        path=path,
        line=0,
        column=0,
        message="Run timed out before this file was checked",
        severity=Severity.ERROR,
        kind=FindingKind.TIMEOUT,
    )


class Engine:
    """Drive one lint run through its states.

    ``idle -> loading -> parsing -> matching -> aggregating -> done``, or
    ``failed`` when the config is invalid or no input files resolve.
    """

    def __init__(self) -> None:
        self.state = RunState.IDLE

    def _transition(self, state: RunState) -> None:
        logger.debug("Engine state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self, paths: Sequence[str], config: Optional[LintConfig] = None) -> Report:
        config = config or LintConfig()
        started = time.monotonic()
        self._transition(RunState.LOADING)
        try:
            ruleset = rules.load(config)
            files = resolve_inputs(paths, config.extensions, config.exclude)
            if not files:
                raise NoInputError("No input files to check")
        except StyleguardError:
            self._transition(RunState.FAILED)
            raise

        deadline = started + config.timeout if config.timeout else None
        findings: List[Finding] = list(ruleset.config_findings)
        timed_out = False
        executor = ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="styleguard")
        try:
            self._transition(RunState.PARSING)
            loaded, unread = _gather(executor, load_model, files, deadline)
            models: List[SourceModel] = []
            for index, outcome in enumerate(loaded):
                if index in unread:
                    findings.append(_timeout_finding(files[index].as_posix()))
                elif isinstance(outcome, Finding):
                    findings.append(outcome)
                else:
                    models.append(outcome)

            self._transition(RunState.MATCHING)
            matched, unmatched = _gather(executor, partial(check_model, ruleset=ruleset), models, deadline)
            for index, outcome in enumerate(matched):
                if index in unmatched:
                    findings.append(_timeout_finding(models[index].path))
                else:
                    findings.extend(outcome or ())
            timed_out = bool(unread or unmatched)
        except Exception:
            self._transition(RunState.FAILED)
            raise
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=True)

        self._transition(RunState.AGGREGATING)
        status = RunStatus.TIMEOUT if timed_out else RunStatus.OK
        report = Report.build(findings, files_checked=len(files), status=status)
        self._transition(RunState.DONE)
        logger.info(
            "Checked %d files with %d rules (config: %s) in %.2fs: %d errors, %d warnings (%s)",
            len(files),
            len(ruleset),
            config.source or "defaults",
            time.monotonic() - started,
            report.summary.error,
            report.summary.warning,
            status.value,
        )
        return report


def run(paths: Sequence[str], config: Optional[LintConfig] = None) -> Report:
    """Check ``paths`` with a fresh :class:`Engine`."""

    return Engine().run(paths, config)
