# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Extraction, merging and auditing of translation catalogs.

EXTRACTION  --------
Scan Python sources for marker calls and collate the messages:

.. code-block:: python

    from po_extractor.translation_utilities import ExtractOptions, Extractor
    extractor = Extractor(ExtractOptions(base_dir=Path("."), markers=("_",)))
    messages = extractor.extract(["src/**/*.py"])
    # Returns a list of ExtractedMessage(key, context, refs, comments)

Keys are resolved from the first argument: string literals, ``+``
concatenation, f-strings (``f"Hi {name}"`` gives ``Hi *``), conditional
expressions and ``or``/``and``. A comment on the call line or the line above
becomes the extracted comment.

MERGING  ------
Merge messages into a parsed catalog without touching the file system:

.. code-block:: python

    from po_extractor.translation_utilities import MergeOptions, load_catalog, merge_catalog
    report = merge_catalog(load_catalog(Path("locale/de.po")), messages, MergeOptions())
    report.counts      # {'added': 1, 'found': 10, 'changed': 2, 'missing': 0}
    report.patch       # keeps translations of messages no longer found
    report.replace     # only the extracted messages

Or merge into files, with a git check guarding each write:

.. code-block:: python

    from po_extractor.translation_utilities import Merger
    results = Merger(MergeOptions(sort="msgid")).merge_pos("locale/*.po", messages)

REFERENCES  ------
``#:`` comments are built from the message references and capped by
``ReferenceOptions(max, per_file, per_line, line_length)``; ``-1`` means
unlimited.

AUDIT  ------
List untranslated, fuzzy and obsolete entries:

.. code-block:: python

    from po_extractor.translation_utilities import audit_catalogs
    summary = audit_catalogs("locale/*.po")
"""

from __future__ import annotations

from .audit import (
    AuditReport,
    AuditSummary,
    audit_catalog,
    audit_catalogs,
    audit_po,
    log_audit_summary,
    write_audit_report,
)
from .catalog import (
    Catalog,
    EntryComments,
    TranslationEntry,
    load_catalog,
    parse_catalog,
    render_catalog,
)
from .config import (
    CommentOptions,
    ExtractOptions,
    MergeOptions,
    ReferenceOptions,
    load_config_file,
)
from .extract import Extractor
from .index import MessageIndex
from .io import write_json_file
from .merge import Change, MergeReport, TrackInfo, merge_catalog
from .message import ExtractedMessage
from .references import build_reference
from .scanner import SourceScanner
from .sorters import SORTERS, sorted_translations
from .write import Merger, PoMergeResult

__all__ = [
    "AuditReport",
    "AuditSummary",
    "Catalog",
    "Change",
    "CommentOptions",
    "EntryComments",
    "ExtractOptions",
    "ExtractedMessage",
    "Extractor",
    "MergeOptions",
    "MergeReport",
    "Merger",
    "MessageIndex",
    "PoMergeResult",
    "ReferenceOptions",
    "SORTERS",
    "SourceScanner",
    "TrackInfo",
    "TranslationEntry",
    "audit_catalog",
    "audit_catalogs",
    "audit_po",
    "build_reference",
    "load_catalog",
    "load_config_file",
    "log_audit_summary",
    "merge_catalog",
    "parse_catalog",
    "render_catalog",
    "sorted_translations",
    "write_audit_report",
    "write_json_file",
]
