# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Option objects for the extractor and the merger.

Shorthand values (``True``, ``False`` or a mapping) are resolved once when
the options are built, so the rest of the code only sees dataclasses.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from json import JSONDecodeError, load
from pathlib import Path
from typing import Any, Callable, Optional, Union

from ..errors import ArgumentError
from .sorters import SORTERS

SortOption = Union[str, Callable[..., int]]

DEFAULT_MARKERS = ("_", "gettext")
DEFAULT_KEY_REGEX = r"i18n-extract (.+)"
DEFAULT_IGNORE_REGEX = r"i18n-ignore-line"


def _check_keys(cls, mapping: Mapping, name: str) -> dict:
    """Return a copy of ``mapping`` after rejecting unknown keys."""
    if not isinstance(mapping, Mapping):
        raise ArgumentError(
            f"Option ({name}) must be a mapping, got '{type(mapping).__name__}'."
        )
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(mapping) - known)
    if unknown:
        raise ArgumentError(f"Unknown option(s) for {name}: {', '.join(unknown)}")
    return dict(mapping)


@dataclass
class ReferenceOptions:
    """Reference comment (``#:``) options.

    A cap that is not a non-negative number means unlimited.
    """

    enabled: bool = True
    max: float = -1
    per_file: float = -1
    per_line: float = -1
    line_length: float = -1

    @classmethod
    def from_value(cls, value: Any) -> ReferenceOptions:
        """Build from ``True``, ``False``, ``None``, a mapping or an instance."""
        if isinstance(value, cls):
            return value
        if value is None or value is True:
            return cls()
        if value is False:
            return cls(enabled=False)
        return cls(**_check_keys(cls, value, "references"))


@dataclass
class CommentOptions:
    """Source comment handling for the extractor."""

    extract: bool = True
    key_regex: Optional[str] = DEFAULT_KEY_REGEX
    ignore_regex: Optional[str] = DEFAULT_IGNORE_REGEX

    @classmethod
    def from_value(cls, value: Any) -> CommentOptions:
        """Build from ``True``, ``False``, ``None``, a mapping or an instance."""
        if isinstance(value, cls):
            return value
        if value is None or value is True:
            return cls()
        if value is False:
            return cls(extract=False, key_regex=None, ignore_regex=None)
        return cls(**_check_keys(cls, value, "comments"))


@dataclass
class ExtractOptions:
    """Options for :class:`~.extract.Extractor`."""

    base_dir: Path = field(default_factory=Path.cwd)
    context: str = ""
    encoding: str = "utf-8"
    markers: tuple[str, ...] = DEFAULT_MARKERS
    arg_pos: int = 0
    members: bool = False
    comments: CommentOptions = field(default_factory=CommentOptions)
    verbose: int = 0

    def __post_init__(self):
        """Normalize shorthand values."""
        self.base_dir = Path(self.base_dir)
        if isinstance(self.markers, str):
            self.markers = (self.markers,)
        self.markers = tuple(dict.fromkeys(self.markers))
        if not self.markers:
            raise ArgumentError("Option (markers) cannot be empty")
        if not isinstance(self.arg_pos, int):
            raise ArgumentError("Option (arg_pos) must be an integer")
        self.comments = CommentOptions.from_value(self.comments)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> ExtractOptions:
        """Build options from a plain mapping, e.g. a config file section."""
        return cls(**_check_keys(cls, mapping, "extract"))


@dataclass
class MergeOptions:
    """Options for the merge engine and the catalog writer."""

    base_dir: Path = field(default_factory=Path.cwd)
    context: str = ""
    sort: SortOption = "source"
    references: ReferenceOptions = field(default_factory=ReferenceOptions)
    replace: bool = False
    dry_run: bool = False
    force_save: bool = False
    git_check: bool = True
    charset: str = "utf-8"
    verbose: int = 0

    def __post_init__(self):
        """Normalize shorthand values and validate the sort option."""
        self.base_dir = Path(self.base_dir)
        self.references = ReferenceOptions.from_value(self.references)
        if self.sort is None:
            self.sort = "source"
        check_sort_option(self.sort)
        if not isinstance(self.context, str):
            raise ArgumentError("Option (context) must be a string")
        if os.environ.get("DRY_RUN"):
            self.dry_run = True

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> MergeOptions:
        """Build options from a plain mapping, e.g. a config file section."""
        return cls(**_check_keys(cls, mapping, "merge"))


def check_sort_option(value: Any) -> None:
    """Raise :class:`ArgumentError` unless ``value`` names a sorter or is callable."""
    if callable(value):
        return
    if isinstance(value, str) and value in SORTERS:
        return
    raise ArgumentError(
        f"Invalid argument (sort): {value!r}. "
        f"Expected one of {', '.join(SORTERS)} or a callable."
    )


def load_config_file(path: Path) -> dict[str, dict]:
    """Read a JSON config file with optional ``extract`` and ``merge`` sections.

    :param path: Path to the JSON file
    :return: Mapping with the ``extract`` and ``merge`` sections (possibly empty)
    :raises ArgumentError: If the file is not valid JSON or has unknown sections
    """
    try:
        with Path(path).open("r", encoding="utf-8") as fp:
            data = load(fp)
    except JSONDecodeError as err:
        raise ArgumentError(f"Invalid config file {path}: {err}") from err
    if not isinstance(data, dict):
        raise ArgumentError(f"Config file {path} must contain a JSON object")
    unknown = sorted(set(data) - {"extract", "merge"})
    if unknown:
        raise ArgumentError(f"Unknown config section(s): {', '.join(unknown)}")
    return {"extract": data.get("extract", {}), "merge": data.get("merge", {})}
