"""Linter orchestrator: load rules, parse templates, evaluate, format results."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from uispec.lint.engine import check
from uispec.lint.recommended import RECOMMENDED_NAME, RECOMMENDED_OPTIONS
from uispec.lint.rules import build_registry, load_rule_options
from uispec.lint.template_parser import SUPPORTED_EXTENSIONS, TemplateParseError, parse_file

if TYPE_CHECKING:
    from collections.abc import Iterable

    from uispec.lint.engine import Violation
    from uispec.lint.rules import RuleOptions

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(".uispec") / "rules.yml"

# Directories never descended into when a directory is linted.
_SKIP_DIRS: frozenset[str] = frozenset({"node_modules", "dist", "build", "__pycache__"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LintError(Exception):
    """Raised when lint encounters a configuration error."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class FileReport:
    """Violations found in one template file."""

    path: str
    violations: list[Violation] = field(default_factory=list)


@dataclass
class LintResult:
    """Result of a lint run."""

    reports: list[FileReport] = field(default_factory=list)
    rules_loaded: int = 0
    files_scanned: int = 0
    files_skipped: int = 0
    elapsed_ms: float = 0.0
    rules_source: str = ""  # rules file path, or the recommended set name

    @property
    def violations(self) -> list[Violation]:
        return [v for report in self.reports for v in report.violations]

    @property
    def violation_count(self) -> int:
        return sum(len(report.violations) for report in self.reports)


# ---------------------------------------------------------------------------
# File discovery
# ---------------------------------------------------------------------------


def _is_skipped_dir(name: str) -> bool:
    return name.startswith(".") or name in _SKIP_DIRS


def collect_template_files(paths: Iterable[Path]) -> list[Path]:
    """Expand *paths* into template files, in sorted order per directory.

    Explicit file arguments are kept even when their extension is unusual;
    directories contribute only files with a supported extension and never
    descend into hidden or build directories.
    """
    files: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        if path.is_file():
            candidates = [path]
        elif path.is_dir():
            candidates = [
                p
                for p in sorted(path.rglob("*"))
                if p.is_file()
                and p.suffix.lower() in SUPPORTED_EXTENSIONS
                and not any(_is_skipped_dir(part) for part in p.relative_to(path).parts[:-1])
            ]
        else:
            logger.warning("Path does not exist: %s", path)
            continue
        for candidate in candidates:
            resolved = candidate.resolve()
            if resolved not in seen:
                seen.add(resolved)
                files.append(candidate)
    return files


def resolve_rule_options(project_root: Path, rules_path: Path | None = None) -> RuleOptions:
    """Load the project's rules, falling back to the recommended set.

    Raises
    ------
    LintError
        When the rules file exists but contains invalid configuration, or
        when an explicit *rules_path* does not exist.
    """
    if rules_path is not None and not rules_path.is_file():
        msg = f"Rules file not found: {rules_path}"
        raise LintError(msg)

    path = rules_path or project_root / DEFAULT_RULES_PATH
    if not path.is_file():
        logger.debug("No rules file at %s, using %s", path, RECOMMENDED_NAME)
        return RECOMMENDED_OPTIONS

    try:
        return load_rule_options(path)
    except ValueError as exc:
        msg = f"Invalid rules configuration: {exc}"
        raise LintError(msg) from exc


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def lint(
    paths: Iterable[Path],
    *,
    project_root: Path | None = None,
    rules_path: Path | None = None,
    options: RuleOptions | None = None,
) -> LintResult:
    """Lint template files against component attribute rules.

    Parameters
    ----------
    paths:
        Files or directories to lint.
    project_root:
        Where ``.uispec/rules.yml`` is looked up (default: current directory).
    rules_path:
        Optional explicit rules file.
    options:
        Pre-built rule options; when given, no rules file is read.

    Returns
    -------
    LintResult
        Per-file violations, counts, and timing.

    Raises
    ------
    LintError
        When the rules configuration is invalid.
    """
    start = time.monotonic()

    source = ""
    if options is None:
        root = project_root or Path.cwd()
        options = resolve_rule_options(root, rules_path)
        if options is RECOMMENDED_OPTIONS:
            source = RECOMMENDED_NAME
        else:
            source = str(rules_path or root / DEFAULT_RULES_PATH)
    registry = build_registry(options)

    result = LintResult(rules_loaded=registry.rule_count, rules_source=source)

    files = collect_template_files(paths)
    if not registry:
        # Nothing can match; skip parsing entirely.
        result.files_scanned = len(files)
        result.elapsed_ms = (time.monotonic() - start) * 1000
        return result

    for file_path in files:
        try:
            elements = parse_file(file_path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read template %s: %s", file_path, exc)
            result.files_skipped += 1
            continue
        except TemplateParseError as exc:
            msg = f"Cannot parse templates: {exc}"
            raise LintError(msg) from exc

        result.files_scanned += 1
        violations = check(elements, registry)
        if violations:
            result.reports.append(FileReport(path=str(file_path), violations=violations))

    result.elapsed_ms = (time.monotonic() - start) * 1000
    return result


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(result: LintResult) -> str:
    """Format a LintResult as human-readable text.

    Example output with violations::

        Rules: 2 loaded (uispec/recommended)
        Files: 3 scanned

        src/views/Form.vue
          4:9  Component <ElInput> must define attribute "maxlength".

        1 violation found (2 rules evaluated, 0.0s)
    """
    lines: list[str] = []

    rules_line = f"Rules: {result.rules_loaded} loaded"
    if result.rules_source:
        rules_line += f" ({result.rules_source})"
    lines.append(rules_line)
    files_line = f"Files: {result.files_scanned} scanned"
    if result.files_skipped:
        files_line += f", {result.files_skipped} skipped"
    lines.append(files_line)
    lines.append("")

    elapsed_str = f"{result.elapsed_ms / 1000:.1f}s"

    if result.reports:
        for report in result.reports:
            lines.append(report.path)
            for v in report.violations:
                lines.append(f"  {v.line}:{v.column}  {v.message}")
                if v.suggestion:
                    lines.append(f"    → {v.suggestion}")
            lines.append("")

        count = result.violation_count
        noun = "violation" if count == 1 else "violations"
        lines.append(
            f"✗ {count} {noun} found ({result.rules_loaded} rules evaluated, {elapsed_str})"
        )
    else:
        lines.append(
            f"✓ No violations found ({result.rules_loaded} rules evaluated, {elapsed_str})"
        )

    return "\n".join(lines)


def format_json(result: LintResult) -> str:
    """Format a LintResult as structured JSON.

    Returns a JSON string with ``violations`` array and ``summary`` object.
    """
    violations_list: list[dict[str, object]] = []
    for report in result.reports:
        for v in report.violations:
            violations_list.append(
                {
                    "file_path": report.path,
                    "line": v.line,
                    "column": v.column,
                    "component": v.component,
                    "attribute": v.attribute_name,
                    "kind": "missing" if v.is_missing else "empty",
                    "library": v.library,
                    "reason": v.reason,
                    "suggestion": v.suggestion,
                    "message": v.message,
                }
            )

    output: dict[str, object] = {
        "violations": violations_list,
        "summary": {
            "rules_loaded": result.rules_loaded,
            "rules_source": result.rules_source or None,
            "violations_count": len(violations_list),
            "files_scanned": result.files_scanned,
            "files_skipped": result.files_skipped,
            "elapsed_ms": result.elapsed_ms,
        },
    }

    return json.dumps(output, ensure_ascii=False, indent=2)


def format_porcelain(result: LintResult) -> str:
    """Format a LintResult as one line per violation.

    Format: ``file_path:line:column:component:attribute``

    Returns empty string when there are no violations.
    """
    lines: list[str] = []
    for report in result.reports:
        for v in report.violations:
            lines.append(f"{report.path}:{v.line}:{v.column}:{v.component}:{v.attribute_name}")
    return "\n".join(lines)
