# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Orderings for references and translation entries.

A translation sorter is a comparator ``(a, b, source_order) -> int`` where
``source_order`` maps each msgid of the source catalog to its position.
Entries that are not in the source catalog get an index after every source
entry, so a stable sort keeps them in the order they were extracted.
"""

from __future__ import annotations

from functools import cmp_to_key
from math import inf
from typing import Callable, Mapping

SourceOrder = Mapping[str, int]
Comparator = Callable[..., int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def split_reference(ref: str) -> tuple[str, int]:
    """Split ``path/to/file:line`` into the file and the numeric line.

    A reference without a numeric line sorts before every line of its file.
    """
    path, sep, line = ref.rpartition(":")
    if not sep:
        return ref, -1
    try:
        return path, int(line)
    except ValueError:
        return ref, -1


def reference_key(ref: str) -> tuple[str, int]:
    """Sort key for references: file path, then line number."""
    return split_reference(ref)


def compare_references(a: str, b: str) -> int:
    """Compare two references by file, then line number."""
    return _cmp(reference_key(a), reference_key(b))


def by_source(a, b, source_order: SourceOrder) -> int:
    """Keep the order of the source catalog, new entries last."""
    return _cmp(source_order.get(a.msgid, inf), source_order.get(b.msgid, inf))


def by_msgid(a, b, source_order: SourceOrder) -> int:
    """Alphabetical by msgid, then context."""
    return _cmp((a.msgid, a.msgctxt or ""), (b.msgid, b.msgctxt or ""))


def by_msgid_desc(a, b, source_order: SourceOrder) -> int:
    """Reverse alphabetical by msgid."""
    return -by_msgid(a, b, source_order)


def _first_reference(entry) -> tuple[int, tuple[str, int]]:
    reference = entry.comments.reference if entry.comments else None
    if not reference or not reference.split():
        return 1, ("", -1)
    return 0, reference_key(reference.split()[0])


def by_reference(a, b, source_order: SourceOrder) -> int:
    """Order by first reference, entries without a reference last."""
    result = _cmp(_first_reference(a), _first_reference(b))
    return result or by_msgid(a, b, source_order)


SORTERS: dict[str, Comparator] = {
    "source": by_source,
    "msgid": by_msgid,
    "msgid-desc": by_msgid_desc,
    "reference": by_reference,
}


def get_sorter(sort) -> Comparator:
    """Resolve a sorter name or return a custom comparator unchanged."""
    if callable(sort):
        return sort
    return SORTERS[sort]


def sorted_translations(translations: Mapping, sort, source_order: SourceOrder) -> dict:
    """Return a new msgid -> entry dict ordered by ``sort``."""
    comparator = get_sorter(sort)
    values = sorted(
        translations.values(),
        key=cmp_to_key(lambda a, b: comparator(a, b, source_order)),
    )
    return {tran.msgid: tran for tran in values}
