# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Extracted message."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass

from ..errors import ArgumentError


def _as_strings(value, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    values = tuple(value)
    for item in values:
        if not isinstance(item, str):
            raise ArgumentError(
                f"Argument ({name}) must contain strings, got '{type(item).__name__}'."
            )
    return values


@dataclass(frozen=True)
class ExtractedMessage:
    """A message collated from every place it was found."""

    key: str
    context: str = ""
    refs: tuple[str, ...] = ()
    comments: tuple[str, ...] = ()

    def __post_init__(self):
        """Validate and normalize the fields."""
        if not isinstance(self.key, str) or not self.key:
            raise ArgumentError(
                f"Argument (key) must be a non-empty string, got {self.key!r}."
            )
        if not isinstance(self.context, str):
            raise ArgumentError("Argument (context) must be a string.")
        object.__setattr__(self, "refs", _as_strings(self.refs, "refs"))
        object.__setattr__(self, "comments", _as_strings(self.comments, "comments"))

    @classmethod
    def from_value(cls, value) -> ExtractedMessage:
        """Accept an instance or a mapping with ``key`` and optional fields."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise ArgumentError(
                f"Message must be a mapping, got '{type(value).__name__}'."
            )
        return cls(
            key=value.get("key"),
            context=value.get("context") or "",
            refs=value.get("refs"),
            comments=value.get("comments"),
        )

    def to_dict(self) -> dict:
        """Plain dict for JSON output."""
        data = asdict(self)
        data["refs"] = list(self.refs)
        data["comments"] = list(self.comments)
        return data
