# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Index of extracted messages."""

from __future__ import annotations

from typing import Optional

from ..errors import ConflictError
from .sorters import reference_key


class MessageIndex:
    """Collect extracted messages by context, key and reference.

    Each (context, key, reference) stores at most one comment. Adding the
    same reference again is a no-op unless a different non-empty comment is
    given, which raises :class:`ConflictError`.
    """

    def __init__(self):
        """Constructor."""
        self._idx: dict[str, dict[str, dict[str, Optional[str]]]] = {}

    def clear(self) -> MessageIndex:
        """Remove every message."""
        self._idx = {}
        return self

    def add(
        self, context: str, key: str, reference: str, comment: Optional[str] = None
    ) -> MessageIndex:
        """Add one message occurrence.

        :param context: The message context (msgctxt)
        :param key: The message key (msgid)
        :param reference: Where the message was found, like ``path/to/file.py:12``
        :param comment: Optional extracted comment
        :raises ConflictError: If a different comment is already stored
        """
        refs = self._idx.setdefault(context, {}).setdefault(key, {})
        stored = refs.get(reference)
        if stored and comment and stored != comment:
            raise ConflictError(
                f"message: '{key}' ref: '{reference}' "
                f"cmt_stored: '{stored}' cmt_new: '{comment}'"
            )
        refs[reference] = stored or comment or None
        return self

    def contexts(self) -> list[str]:
        """List all contexts."""
        return list(self._idx)

    def keys(self, context: str) -> list[str]:
        """List all keys of a context."""
        return list(self._idx.get(context, {}))

    def refs(self, context: str, key: str) -> list[str]:
        """List the references of a message, ordered by file, then line."""
        return sorted(self._idx[context][key], key=reference_key)

    def comments(self, context: str, key: str) -> list[str]:
        """List the comments of a message in reference order."""
        return [
            comment
            for comment in (
                self.comment(context, key, ref) for ref in self.refs(context, key)
            )
            if comment
        ]

    def comment(self, context: str, key: str, reference: str) -> Optional[str]:
        """Get the comment stored for a message reference."""
        return self._idx[context][key][reference]

    def __len__(self):
        """Number of distinct (context, key) pairs."""
        return sum(len(keys) for keys in self._idx.values())
