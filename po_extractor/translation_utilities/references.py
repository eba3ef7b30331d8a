# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Formatting of ``#:`` reference comments."""

from __future__ import annotations

from collections.abc import Sequence

from ..utils import check_max
from .config import ReferenceOptions
from .sorters import split_reference


def select_references(refs: Sequence[str], options: ReferenceOptions) -> list[str]:
    """Apply the ``max`` and ``per_file`` caps to ``refs``.

    Iteration stops once ``max`` references were kept. A reference whose file
    already reached ``per_file`` is skipped and iteration continues.
    """
    per_file: dict[str, int] = {}
    built: list[str] = []
    for ref in refs:
        if check_max(len(built) + 1, options.max):
            break
        file, _line = split_reference(ref)
        per_file[file] = per_file.get(file, 0) + 1
        if check_max(per_file[file], options.per_file):
            continue
        built.append(ref)
    return built


def build_reference_lines(refs: Sequence[str], options: ReferenceOptions) -> list[str]:
    """Wrap references into lines.

    A new line starts when the next reference would exceed ``per_line``
    references or ``line_length`` characters. A single reference longer than
    ``line_length`` still gets its own line.
    """
    lines: list[str] = []
    line = ""
    count = 0
    for ref in refs:
        is_max = check_max(count + 1, options.per_line) or (
            count > 0 and check_max(len(line) + len(ref) + 1, options.line_length)
        )
        if is_max and line:
            lines.append(line)
            line = ""
            count = 0
        line += (" " if count > 0 else "") + ref
        count += 1
    if line:
        lines.append(line)
    return lines


def build_reference(refs: Sequence[str], options: ReferenceOptions) -> str:
    """Render references as the text of a reference comment.

    :param refs: References like ``path/to/file.py:12`` in output order
    :param options: The caps to apply
    :return: The lines joined with a newline
    """
    return "\n".join(build_reference_lines(select_references(refs, options), options))
