# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Merge extracted messages into a catalog.

Every msgid ends up in one bucket:

- **added**: extracted, not in the catalog yet
- **found**: extracted and already in the catalog; also **changed** when its
  reference or extracted comment was updated
- **missing**: in the catalog but no longer extracted

Two catalogs are produced. ``patch`` keeps missing entries (without their
extracted and reference comments) so their translations survive, ``replace``
only holds the extracted messages. The source catalog is never modified.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..errors import ArgumentError, DuplicateKeyError, MissingContextError
from ..utils import Echo, _echo, _verbose
from .catalog import Catalog, EntryComments, TranslationEntry
from .config import MergeOptions, ReferenceOptions, check_sort_option
from .message import ExtractedMessage
from .references import build_reference
from .sorters import sorted_translations

BUCKETS = ("added", "found", "changed", "missing")

Listener = Optional[Callable[[str, "TrackInfo"], Any]]


@dataclass
class Change:
    """A field of an entry that was updated by the merge."""

    field: str
    old: Optional[str]
    new: Optional[str]


@dataclass
class TrackInfo:
    """What happened to one msgid."""

    tran: TranslationEntry
    message: Optional[ExtractedMessage] = None
    changes: list[Change] = field(default_factory=list)


@dataclass
class MergeReport:
    """Result of :func:`merge_catalog`."""

    track: dict[str, dict[str, TrackInfo]]
    counts: dict[str, int]
    is_change: bool
    catalogs: dict[str, Catalog]

    @property
    def patch(self) -> Catalog:
        """Catalog that keeps missing entries."""
        return self.catalogs["patch"]

    @property
    def replace(self) -> Catalog:
        """Catalog with the extracted messages only."""
        return self.catalogs["replace"]


def _notify(listener: Listener, event: str, info: TrackInfo) -> None:
    if listener:
        listener(event, info)


def _check_arguments(catalog, messages) -> None:
    if not isinstance(catalog, Catalog):
        raise ArgumentError(
            f"Argument (catalog) must be a Catalog, got '{type(catalog).__name__}'."
        )
    if not isinstance(catalog.translations, dict):
        raise ArgumentError("Argument (catalog.translations) must be a dict.")
    if not isinstance(catalog.headers, dict):
        raise ArgumentError("Argument (catalog.headers) must be a dict.")
    if isinstance(messages, (str, bytes)) or not isinstance(messages, Iterable):
        raise ArgumentError(
            f"Argument (messages) must be a list, got '{type(messages).__name__}'."
        )


def add_reference(
    tran: TranslationEntry, refs: Iterable[str], options: ReferenceOptions
) -> Optional[Change]:
    """Set the reference comment of ``tran``.

    Only the references themselves are compared; a different line layout
    updates the comment without reporting a change.
    """
    if tran.comments is None:
        tran.comments = EntryComments()
    old = tran.comments.reference
    reference = build_reference(list(refs), options) or None
    tran.comments.reference = reference
    if (old or "").split() != (reference or "").split():
        return Change("comments.reference", old, reference)
    return None


def add_extracted_comment(
    tran: TranslationEntry, comments: Iterable[str]
) -> Optional[Change]:
    """Set, replace or clear the extracted comment of ``tran``."""
    extracted = "\n".join(comments)
    old = tran.comments.extracted if tran.comments else None
    if extracted:
        if tran.comments is None:
            tran.comments = EntryComments()
        if old != extracted:
            tran.comments.extracted = extracted
            return Change("comments.extracted", old, extracted)
    elif old:
        tran.comments.extracted = None
        return Change("comments.extracted", old, None)
    return None


def merge_catalog(
    catalog: Catalog,
    messages: Iterable,
    options: Optional[MergeOptions] = None,
    *,
    echo: Echo = None,
    listener: Listener = None,
) -> MergeReport:
    """Merge extracted messages into the ``options.context`` bucket of a catalog.

    :param catalog: The source catalog, left untouched
    :param messages: :class:`ExtractedMessage` objects or mappings with a
        ``key`` and optional ``refs`` and ``comments``
    :param options: Merge options; defaults to :class:`MergeOptions`
    :param echo: Callback for progress and warnings
    :param listener: Called with ``(event, info)`` for ``added``, ``found``,
        ``changed`` and ``missing``
    :return: The merge report
    :raises ArgumentError: On invalid arguments or sort option
    :raises MissingContextError: If the context is not in the catalog
    :raises DuplicateKeyError: If a msgid is given twice
    """
    options = options or MergeOptions()
    _check_arguments(catalog, messages)
    check_sort_option(options.sort)

    context = options.context
    if context not in catalog.translations:
        raise MissingContextError(f"Context '{context}' missing from po.")

    source = catalog.translations[context]
    headers_lc = {key.lower(): value for key, value in catalog.headers.items()}
    verbose = options.verbose
    _verbose(
        1,
        f"Processing po: context='{context}' "
        f"language={headers_lc.get('language') or 'unknown'} "
        f"translations={catalog.count(context)}",
        echo,
        verbose,
        fg="cyan",
    )

    track: dict[str, dict[str, TrackInfo]] = {bucket: {} for bucket in BUCKETS}
    data: dict[str, dict[str, TranslationEntry]] = {"patch": {}, "replace": {}}

    for value in messages:
        message = ExtractedMessage.from_value(value)
        msgid = message.key

        if msgid in data["patch"]:
            raise DuplicateKeyError(
                f"Duplicate msgid: '{msgid}'. Collate the messages first."
            )

        found = source.get(msgid)
        tran = found.copy() if found is not None else TranslationEntry(msgid=msgid)
        changes: list[Change] = []
        info = TrackInfo(tran=tran, message=message)

        data["patch"][msgid] = tran
        data["replace"][msgid] = tran

        if options.references.enabled:
            if message.refs:
                change = add_reference(tran, message.refs, options.references)
                if found is not None and change:
                    changes.append(change)
            else:
                _echo(f"Missing location reference for '{msgid}'", echo, fg="yellow")

        change = add_extracted_comment(tran, message.comments)

        if found is not None:
            if change:
                changes.append(change)
            track["found"][msgid] = info
            _verbose(2, f"found: {msgid}", echo, verbose)
            _notify(listener, "found", info)
            if changes:
                info.changes = changes
                track["changed"][msgid] = info
                _verbose(2, f"changed: {msgid}", echo, verbose)
                _notify(listener, "changed", info)
        else:
            if context:
                tran.msgctxt = context
            track["added"][msgid] = info
            _verbose(1, f"added: {msgid}", echo, verbose)
            _notify(listener, "added", info)

    for msgid, found in source.items():
        if not msgid or msgid in data["patch"]:
            continue
        tran = found.copy()
        if tran.comments is not None:
            tran.comments.extracted = None
            tran.comments.reference = None
        info = TrackInfo(tran=tran)
        track["missing"][msgid] = info
        data["patch"][msgid] = tran
        _verbose(1, f"missing: {msgid}", echo, verbose)
        _notify(listener, "missing", info)

    counts = {bucket: len(entries) for bucket, entries in track.items()}
    is_change = bool(counts["added"] + counts["missing"] + counts["changed"])

    source_order = {msgid: idx for idx, msgid in enumerate(source)}
    catalogs = {
        method: catalog.with_context(
            context, sorted_translations(trans, options.sort, source_order)
        )
        for method, trans in data.items()
    }

    _echo(
        "Totals: " + ", ".join(f"{bucket}={count}" for bucket, count in counts.items()),
        echo,
    )

    return MergeReport(
        track=track, counts=counts, is_change=is_change, catalogs=catalogs
    )
