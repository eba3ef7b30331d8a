# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Extract messages from Python source files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from ..utils import Echo, PathLike, _echo, _verbose, glob_files, rel_path, resolve
from .config import ExtractOptions
from .index import MessageIndex
from .message import ExtractedMessage
from .scanner import ScannedMessage, SourceScanner


class Extractor:
    """Scan source files and collate their messages.

    .. code-block:: python

        extractor = Extractor(ExtractOptions(base_dir=Path("src")))
        messages = extractor.extract("**/*.py")
    """

    def __init__(self, options: Optional[ExtractOptions] = None, echo: Echo = None):
        """Constructor.

        :raises ArgumentError: If a comment regular expression is invalid
        """
        self.options = options or ExtractOptions()
        self.echo = echo
        self.index = MessageIndex()
        self.scanner = SourceScanner(self.options, echo=echo)

    @property
    def base_dir(self) -> Path:
        """Resolved base directory."""
        return self.options.base_dir.resolve()

    def extract(
        self, globs: Union[PathLike, Iterable[PathLike]], encoding: Optional[str] = None
    ) -> list[ExtractedMessage]:
        """Extract messages from files, same as ``add_files(globs).get_messages()``."""
        return self.add_files(globs, encoding).get_messages()

    def add_files(
        self, globs: Union[PathLike, Iterable[PathLike]], encoding: Optional[str] = None
    ) -> Extractor:
        """Extract messages from files or glob patterns and add them to the index.

        :raises ArgumentError: If no pattern is given
        """
        files = glob_files(self.base_dir, globs)
        _echo(f"Extracting from {len(files)} files", self.echo, fg="blue")
        count = sum(len(self._add_file(file, encoding)) for file in files)
        _echo(f"Extracted {count} key instances", self.echo, fg="green")
        return self

    def add_file(self, file: PathLike, encoding: Optional[str] = None) -> Extractor:
        """Extract messages from a single file and add them to the index."""
        path = resolve(self.base_dir, file)
        _echo(f"Extracting from {rel_path(self.base_dir, path)}", self.echo, fg="blue")
        count = len(self._add_file(path, encoding))
        _echo(f"Extracted {count} key instances", self.echo, fg="green")
        return self

    def add_content(self, file: PathLike, content: str) -> list[ScannedMessage]:
        """Scan source code as if read from ``file`` and index its messages.

        :raises ConflictError: If the same reference gets different comments
        :raises SyntaxError: If ``content`` is not valid Python
        """
        rel = rel_path(self.base_dir, resolve(self.base_dir, file))
        context = self.options.context
        messages = self.scanner.scan(content, filename=rel)
        for message in messages:
            self.index.add(context, message.key, f"{rel}:{message.line}", message.comment)
        _verbose(1, f"{len(messages)} keys in {rel}", self.echo, self.options.verbose)
        return messages

    def get_messages(self) -> list[ExtractedMessage]:
        """Return the collated messages of the configured context."""
        context = self.options.context
        return [
            ExtractedMessage(
                key=key,
                context=context,
                refs=tuple(self.index.refs(context, key)),
                comments=tuple(self.index.comments(context, key)),
            )
            for key in self.index.keys(context)
        ]

    def clear(self) -> Extractor:
        """Forget all extracted messages."""
        self.index.clear()
        return self

    def _add_file(self, path: Path, encoding: Optional[str]) -> list[ScannedMessage]:
        encoding = encoding or self.options.encoding
        rel = rel_path(self.base_dir, path)
        try:
            content = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as err:
            _echo(f"  Error reading {rel}: {err}", self.echo, fg="red")
            return []
        try:
            return self.add_content(path, content)
        except SyntaxError as err:
            _echo(f"  Could not parse {rel}: {err}", self.echo, fg="red")
            return []
