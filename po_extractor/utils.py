# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Utils."""

from __future__ import annotations

import os
from math import isfinite
from numbers import Real
from pathlib import Path
from subprocess import run
from typing import Callable, Iterable, Optional, Union

from .errors import ArgumentError, GitCommandError

Echo = Optional[Callable[..., None]]

PathLike = Union[str, os.PathLike]

GIT_STATUS_OK = ("clean", "added", "staged")


def _echo(message: str, echo: Echo, **kwargs) -> None:
    """Call the provided echo callback if it exists."""
    if echo:
        echo(message, **kwargs)


def _verbose(level: int, message: str, echo: Echo, verbose: int, **kwargs) -> None:
    """Echo a detail message when ``verbose`` is at least ``level``."""
    if verbose >= level:
        _echo(message, echo, **kwargs)


def convert_to_list(_, __, value):
    """Turn Click's multiple=True tuple into a plain list."""
    if value is None:
        return []
    return list(value)


def ensure_parent_directory(_, __, value):
    """Make sure the parent directory exists for a Click Path option."""
    if value:
        value.parent.mkdir(parents=True, exist_ok=True)
    return value


def check_max(value, maximum) -> bool:
    """Return whether ``value`` exceeds ``maximum``.

    A maximum that is not a non-negative finite number means unlimited.
    """
    if isinstance(maximum, bool) or not isinstance(maximum, Real):
        return False
    if not isfinite(maximum) or maximum < 0:
        return False
    return value > maximum


def rel_path(base_dir: PathLike, file: PathLike) -> str:
    """Path of ``file`` relative to ``base_dir`` with forward slashes."""
    path = Path(file)
    if not path.is_absolute():
        return path.as_posix()
    try:
        return Path(os.path.relpath(path, base_dir)).as_posix()
    except ValueError:
        # different drive on windows
        return path.as_posix()


def resolve(base_dir: PathLike, file: PathLike) -> Path:
    """Resolve ``file`` against ``base_dir``."""
    return (Path(base_dir) / file).resolve()


def glob_files(base_dir: PathLike, patterns: Union[PathLike, Iterable[PathLike]]) -> list[Path]:
    """Expand file paths and glob patterns relative to ``base_dir``.

    Existing paths are taken as-is, everything else is globbed (``**`` is
    supported). The result keeps the pattern order and drops duplicates.

    :raises ArgumentError: If no pattern is given
    """
    if isinstance(patterns, (str, os.PathLike)):
        patterns = [patterns]
    patterns = list(patterns)
    if not patterns:
        raise ArgumentError("Argument (globs) cannot be empty")

    found: dict[Path, None] = {}
    for pattern in patterns:
        path = Path(base_dir).resolve() / pattern
        if path.is_file():
            found[path.resolve()] = None
            continue
        anchor = Path(path.anchor)
        for match in sorted(anchor.glob(str(path.relative_to(anchor)))):
            if match.is_file():
                found[match.resolve()] = None
    return list(found)


def git_file_status(file: Path) -> str:
    """Return the git status of a single file.

    One of ``clean``, ``untracked``, ``staged``, ``added`` or ``modified``.

    :raises GitCommandError: If git cannot be run or exits with an error
    """
    file = Path(file)
    cmd = ["git", "status", "--porcelain=v1", "--", file.name]
    try:
        result = run(cmd, capture_output=True, text=True, cwd=file.parent)
    except OSError as err:
        raise GitCommandError(f"Failed to execute git: {err}") from err
    if result.returncode != 0:
        raise GitCommandError(
            f"Git exited with status code {result.returncode}: {result.stderr}",
            returncode=result.returncode,
            stderr=result.stderr,
        )

    basename = file.name.lower()
    for line in result.stdout.split("\n"):
        if basename not in line.lower():
            continue
        attr = line[:2]
        if "?" in attr:
            return "untracked"
        if attr == "M ":
            return "staged"
        if attr == "A ":
            return "added"
        return "modified"
    return "clean"
