# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.
"""Audit PO files for untranslated, fuzzy and obsolete entries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ..errors import MissingContextError
from ..utils import Echo, PathLike, _echo, glob_files, rel_path
from .catalog import Catalog, load_catalog
from .io import write_json_file


@dataclass
class Issues:
    """Translation issues found in a PO file."""

    untranslated: list[str] = field(default_factory=list)
    fuzzy: list[str] = field(default_factory=list)
    obsolete: list[str] = field(default_factory=list)


@dataclass
class Counts:
    """Counts of translation issues."""

    untranslated: int = 0
    fuzzy: int = 0
    obsolete: int = 0

    @classmethod
    def from_issues(cls, issues: Issues) -> Counts:
        """Create Counts from Issues object."""
        return cls(
            untranslated=len(issues.untranslated),
            fuzzy=len(issues.fuzzy),
            obsolete=len(issues.obsolete),
        )

    @property
    def total(self) -> int:
        """Calculate total number of issues."""
        return self.untranslated + self.fuzzy + self.obsolete


@dataclass
class AuditReport:
    """Audit report for a single PO file."""

    file: str
    language: str
    issues: Issues
    counts: Counts


@dataclass
class AuditSummary:
    """Summary of audit results across all files."""

    total_files: int = 0
    total_issues: int = 0
    untranslated_strings: int = 0
    fuzzy_translations: int = 0
    obsolete_translations: int = 0
    reports: list[AuditReport] = field(default_factory=list)


def audit_catalog(catalog: Catalog, file: str, context: str = "") -> AuditReport:
    """Check one catalog for problems.

    :param catalog: The parsed PO file
    :param file: Name of the file, used in the report
    :param context: The context to check
    :return: AuditReport with all issues found
    :raises MissingContextError: If the context is not in the catalog
    """
    if context not in catalog.translations:
        raise MissingContextError(f"Context '{context}' missing from po file {file}")

    issues = Issues()
    for tran in catalog.translations[context].values():
        if not tran.msgid:
            continue
        if "fuzzy" in tran.flags:
            issues.fuzzy.append(tran.msgid)
        if not tran.is_translated:
            issues.untranslated.append(tran.msgid)
    issues.obsolete.extend(tran.msgid for tran in catalog.obsolete)

    headers_lc = {key.lower(): value for key, value in catalog.headers.items()}
    return AuditReport(
        file=file,
        language=headers_lc.get("language") or "unknown",
        issues=issues,
        counts=Counts.from_issues(issues),
    )


def audit_po(
    path: Path, context: str = "", base_dir: PathLike = ".", charset: str = "utf-8"
) -> AuditReport:
    """Read and audit one PO file, decoding it with ``charset``."""
    catalog = load_catalog(path, charset)
    return audit_catalog(catalog, rel_path(Path(base_dir).resolve(), path), context)


def audit_catalogs(
    globs: Union[PathLike, Iterable[PathLike]],
    context: str = "",
    base_dir: PathLike = ".",
    charset: str = "utf-8",
    *,
    echo: Echo = None,
) -> AuditSummary:
    """Audit every PO file matched by ``globs``.

    :param globs: PO file paths or glob patterns
    :param context: The context to check
    :param base_dir: Directory the patterns are relative to
    :param charset: Charset used to decode the files
    :return: AuditSummary with all reports
    """
    files = glob_files(base_dir, globs)
    if files:
        _echo(f"Processing {len(files)} files", echo, fg="blue")
    else:
        _echo("No files found", echo, fg="yellow")

    reports = [audit_po(file, context, base_dir, charset) for file in files]
    return AuditSummary(
        total_files=len(reports),
        total_issues=sum(r.counts.total for r in reports),
        untranslated_strings=sum(r.counts.untranslated for r in reports),
        fuzzy_translations=sum(r.counts.fuzzy for r in reports),
        obsolete_translations=sum(r.counts.obsolete for r in reports),
        reports=reports,
    )


def log_audit_summary(summary: AuditSummary, echo: Echo) -> None:
    """Echo complete files first, then files by number of untranslated messages."""
    complete = [r for r in summary.reports if not r.counts.untranslated]
    incomplete = sorted(
        (r for r in summary.reports if r.counts.untranslated),
        key=lambda r: r.counts.untranslated,
        reverse=True,
    )
    for report in complete:
        _echo(f"{report.file} has no missing translations", echo, fg="green")
    for report in incomplete:
        _echo(
            f"{report.file} has {report.counts.untranslated} untranslated messages",
            echo,
            fg="yellow",
        )
        for msgid in report.issues.untranslated:
            _echo(f"    {msgid}", echo)


def _audit_report_to_dict(report: AuditReport) -> dict:
    """Convert AuditReport to dictionary for JSON."""
    return {
        "file": report.file,
        "language": report.language,
        "issues": {
            "untranslated": report.issues.untranslated,
            "fuzzy": report.issues.fuzzy,
            "obsolete": report.issues.obsolete,
        },
        "counts": {
            "untranslated": report.counts.untranslated,
            "fuzzy": report.counts.fuzzy,
            "obsolete": report.counts.obsolete,
        },
    }


def write_audit_report(summary: AuditSummary, output_dir: Path) -> Path:
    """Write the audit report to ``audit-report.json``.

    :param summary: Output from audit_catalogs()
    :param output_dir: Where to save the report
    :return: Path of the written report
    """
    report_dict = {
        "summary": {
            "totalFiles": summary.total_files,
            "totalIssues": summary.total_issues,
            "untranslatedStrings": summary.untranslated_strings,
            "fuzzyTranslations": summary.fuzzy_translations,
            "obsoleteTranslations": summary.obsolete_translations,
        },
        "reports": [_audit_report_to_dict(r) for r in summary.reports],
    }

    report_path = output_dir / "audit-report.json"
    write_json_file(report_path, report_dict)
    return report_path
