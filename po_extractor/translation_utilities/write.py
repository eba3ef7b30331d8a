# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Merge extracted messages into PO files on disk."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..errors import ArgumentError, GitCommandError, UnsavedChangesError
from ..utils import (
    GIT_STATUS_OK,
    Echo,
    PathLike,
    _echo,
    _verbose,
    git_file_status,
    glob_files,
    rel_path,
    resolve,
)
from .catalog import Catalog, parse_catalog, render_catalog
from .config import MergeOptions
from .merge import Listener, MergeReport, merge_catalog


@dataclass
class PoMergeResult:
    """Result of merging messages into one PO file."""

    file: str
    source_file: str
    content: bytes
    catalog: Catalog
    source_content: bytes
    source_catalog: Catalog
    report: MergeReport
    written: bool = field(default=False)

    @property
    def counts(self) -> dict[str, int]:
        """Bucket sizes."""
        return self.report.counts

    @property
    def is_change(self) -> bool:
        """Whether messages were added, changed or went missing."""
        return self.report.is_change

    @property
    def track(self):
        """Per-bucket tracking info."""
        return self.report.track


class Merger:
    """Merge messages into PO files, guarding writes with a git check.

    .. code-block:: python

        merger = Merger(MergeOptions(base_dir=Path("."), git_check=False))
        results = merger.merge_pos("locale/*.po", messages)
    """

    def __init__(
        self,
        options: Optional[MergeOptions] = None,
        echo: Echo = None,
        listener: Listener = None,
    ):
        """Constructor."""
        self.options = options or MergeOptions()
        self.echo = echo
        self.listener = listener

    @property
    def base_dir(self) -> Path:
        """Resolved base directory."""
        return self.options.base_dir.resolve()

    def rel_path(self, file: PathLike) -> str:
        """Path relative to the base directory."""
        return rel_path(self.base_dir, resolve(self.base_dir, file))

    def get_merge_po_result(self, source_file: PathLike, messages: Iterable) -> PoMergeResult:
        """Merge messages into a PO file without writing anything.

        The ``replace`` option selects which catalog is rendered.

        :raises ArgumentError: On invalid messages or options
        :raises MissingContextError: If the context is not in the file
        :raises DuplicateKeyError: If a msgid is given twice
        :raises OSError: If the file cannot be read
        """
        messages = _check_messages(messages)
        path = resolve(self.base_dir, source_file)
        rel = self.rel_path(path)
        _echo(f"Reading {rel}", self.echo, fg="blue")
        source_content = path.read_bytes()
        source_catalog = parse_catalog(source_content, self.options.charset)
        report = merge_catalog(
            source_catalog,
            messages,
            self.options,
            echo=self.echo,
            listener=self.listener,
        )
        catalog = report.replace if self.options.replace else report.patch
        return PoMergeResult(
            file=rel,
            source_file=rel,
            content=render_catalog(catalog),
            catalog=catalog,
            source_content=source_content,
            source_catalog=source_catalog,
            report=report,
        )

    def merge_po(self, file: PathLike, messages: Iterable) -> PoMergeResult:
        """Merge messages into a PO file and write it back.

        The file is written when something changed, when ``force_save`` is
        set, or when the rendered content differs from the file.

        :raises UnsavedChangesError: If the file has uncommitted changes
        :raises GitCommandError: If git cannot be run
        """
        path = resolve(self.base_dir, file)
        self.check_git_dirty(path)
        result = self.get_merge_po_result(path, messages)
        if (
            result.is_change
            or self.options.force_save
            or result.content != result.source_content
        ):
            result.written = self.write_file(path, result.content)
        else:
            _echo(f"No changes to write {result.file}", self.echo)
        return result

    def merge_pos(
        self, globs: Union[PathLike, Iterable[PathLike]], messages: Iterable
    ) -> list[PoMergeResult]:
        """Merge messages into several PO files.

        Every file is git-checked before the first one is merged.
        """
        messages = _check_messages(messages)
        files = glob_files(self.base_dir, globs)
        for file in files:
            self.check_git_dirty(file)
        if files:
            _echo(f"Updating {len(files)} po files", self.echo, fg="blue")
        else:
            _echo("No po files found", self.echo, fg="yellow")
        return [self.merge_po(file, messages) for file in files]

    def merge_po_to(
        self, source_file: PathLike, dest_file: PathLike, messages: Iterable
    ) -> PoMergeResult:
        """Merge messages into a PO file and write the result to another file."""
        dest = resolve(self.base_dir, dest_file)
        if dest.exists():
            self.check_git_dirty(dest)
        result = self.get_merge_po_result(source_file, messages)
        result.file = self.rel_path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        result.written = self.write_file(dest, result.content)
        return result

    def merge_pos_to(
        self,
        source_globs: Union[PathLike, Iterable[PathLike]],
        dest_dir: PathLike,
        messages: Iterable,
    ) -> list[PoMergeResult]:
        """Merge messages into several PO files, writing into ``dest_dir``.

        The destination of ``locale/de/messages.po`` is
        ``<dest_dir>/de/messages.po``: the first path component is dropped.
        """
        messages = _check_messages(messages)
        source_files = glob_files(self.base_dir, source_globs)
        dest_files = [self.dest_path(file, dest_dir) for file in source_files]
        if source_files:
            _echo(f"Creating {len(source_files)} new po files", self.echo, fg="blue")
        else:
            _echo("No po files found", self.echo, fg="yellow")
        for dest in dest_files:
            if dest.exists():
                self.check_git_dirty(dest)
        return [
            self.merge_po_to(source_file, dest, messages)
            for source_file, dest in zip(source_files, dest_files)
        ]

    def dest_path(self, source_file: PathLike, dest_dir: PathLike) -> Path:
        """Destination of ``source_file`` under ``dest_dir``, minus its first directory."""
        parts = Path(self.rel_path(source_file)).parts
        rel_short = Path(*parts[1:]) if len(parts) > 1 else Path(*parts)
        return resolve(self.base_dir, dest_dir) / rel_short

    def check_git_dirty(self, file: PathLike) -> None:
        """Refuse to overwrite a file with uncommitted changes.

        :raises UnsavedChangesError: If git reports changes other than
            ``clean``, ``added`` or ``staged``
        :raises GitCommandError: If git cannot be run
        """
        rel = self.rel_path(file)
        _verbose(1, f"gitCheck={self.options.git_check} {rel}", self.echo, self.options.verbose)
        if not self.options.git_check:
            return
        try:
            status = git_file_status(resolve(self.base_dir, file))
            if status not in GIT_STATUS_OK:
                _echo(f"Unsaved changes in git for {rel} ({status})", self.echo, fg="red")
                _echo(
                    "Commit, stash, or abandon the changes before continuing",
                    self.echo,
                    fg="red",
                )
                raise UnsavedChangesError(
                    f"Refusing to clobber {status} changes in git: {rel}"
                )
        except GitCommandError as err:
            _echo(f"Git check failed for {rel}: {err}", self.echo, fg="red")
            _echo("Use --no-git-check to ignore this check.", self.echo)
            raise
        _verbose(1, f"git status {status} {rel}", self.echo, self.options.verbose)

    def write_file(self, file: Path, content: bytes) -> bool:
        """Write ``content`` unless this is a dry run.

        :return: Whether the file was written
        """
        rel = self.rel_path(file)
        if self.options.dry_run:
            _echo(f"Dry run only, not writing {rel}", self.echo, fg="yellow")
            return False
        _echo(f"Writing {rel}", self.echo, fg="green")
        Path(file).write_bytes(content)
        return True


def _check_messages(messages) -> list:
    if isinstance(messages, (str, bytes)) or not isinstance(messages, Iterable):
        raise ArgumentError(
            f"Argument (messages) must be a list, got '{type(messages).__name__}'."
        )
    return list(messages)
