# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Find marker calls like ``_("Save")`` in Python source."""

from __future__ import annotations

import ast
import io
import re
import tokenize
from dataclasses import dataclass
from typing import Optional

from ..errors import ArgumentError
from ..utils import Echo, _echo
from .config import ExtractOptions

WILDCARD = "*"

# Nodes that carry a value we cannot know statically.
NO_INFORMATION_TYPES = (ast.Call, ast.Name, ast.Attribute)


@dataclass
class ScannedMessage:
    """A key found at one line of a file."""

    key: str
    line: int
    comment: Optional[str] = None


def _compile(pattern: Optional[str], name: str) -> Optional[re.Pattern]:
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as err:
        raise ArgumentError(f"Invalid regular expression for {name}: {err}") from err


def read_comments(content: str) -> list[tuple[int, str]]:
    """Return ``(line, text)`` for every ``#`` comment in ``content``."""
    readline = io.StringIO(content).readline
    return [
        (token.start[0], token.string[1:].strip())
        for token in tokenize.generate_tokens(readline)
        if token.type == tokenize.COMMENT
    ]


class SourceScanner(ast.NodeVisitor):
    """Collect translatable keys from one Python module.

    Comments are handled like this:

    - a comment on the line of a marker call, or on the line above it, becomes
      the extracted comment of the key (each comment is used once)
    - ``# i18n-extract Some key`` declares a key without a call
    - ``# i18n-ignore-line`` skips marker calls ending on that line
    """

    def __init__(self, options: ExtractOptions, echo: Echo = None):
        """Constructor."""
        self.options = options
        self.echo = echo
        self.key_regex = _compile(options.comments.key_regex, "comments.key_regex")
        self.ignore_regex = _compile(
            options.comments.ignore_regex, "comments.ignore_regex"
        )
        self._reset()

    def _reset(self, filename: str = "<unknown>") -> None:
        self.filename = filename
        self.messages: list[ScannedMessage] = []
        self._comments: dict[int, str] = {}
        self._ignored: set[int] = set()
        self._line = 0

    def _warn(self, message: str) -> None:
        _echo(f"{self.filename}:{self._line}: {message}", self.echo, fg="yellow")

    def scan(self, content: str, filename: str = "<unknown>") -> list[ScannedMessage]:
        """Scan source code and return the keys in traversal order.

        :raises SyntaxError: If ``content`` is not valid Python
        """
        self._reset(filename)
        tree = ast.parse(content, filename=filename)
        self._scan_comments(read_comments(content))
        self.visit(tree)
        return self.messages

    def _scan_comments(self, comments: list[tuple[int, str]]) -> None:
        for line, text in comments:
            if self.options.comments.extract:
                self._comments[line] = text

            key_match = self.key_regex.search(text) if self.key_regex else None
            if key_match:
                message = ScannedMessage(key=key_match.group(1).strip(), line=line)
                message.comment = self._comments.pop(line - 1, None)
                self._comments.pop(line, None)
                self.messages.append(message)

            if self.ignore_regex and self.ignore_regex.search(text):
                self._ignored.add(line)
                self._comments.pop(line, None)

    def _is_marker(self, node: ast.Call) -> bool:
        func = node.func
        if isinstance(func, ast.Name):
            return func.id in self.options.markers
        if self.options.members and isinstance(func, ast.Attribute):
            return func.attr in self.options.markers
        return False

    def visit_Call(self, node: ast.Call) -> None:
        """Record the keys of marker calls."""
        if self._is_marker(node) and node.end_lineno not in self._ignored:
            self._line = node.lineno
            arg_pos = self.options.arg_pos
            idx = len(node.args) + arg_pos if arg_pos < 0 else arg_pos
            if 0 <= idx < len(node.args):
                for key in self.get_keys(node.args[idx]):
                    if not key:
                        continue
                    comments = [
                        self._comments.pop(line)
                        for line in (node.lineno - 1, node.lineno)
                        if line in self._comments
                    ]
                    self.messages.append(
                        ScannedMessage(
                            key=key,
                            line=node.lineno,
                            comment="\n".join(comments) or None,
                        )
                    )
        self.generic_visit(node)

    def get_keys(self, node: ast.AST) -> list[Optional[str]]:
        """Resolve the keys an argument node can produce.

        ``None`` stands for a key that cannot be resolved.
        """
        if isinstance(node, ast.Constant):
            if isinstance(node.value, str):
                return [node.value]
            self._warn(f"Unsupported constant: {type(node.value).__name__}")
            return [None]

        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Add):
            left = self.get_keys(node.left)
            right = self.get_keys(node.right)
            if len(left) > 1 or len(right) > 1:
                self._warn(
                    "Unsupported multiple keys for binary expression, keys skipped."
                )
                return [None]
            if left[0] is None or right[0] is None:
                return [None]
            return [left[0] + right[0]]

        if isinstance(node, ast.JoinedStr):
            segments = [""]
            for value in node.values:
                if isinstance(value, ast.Constant):
                    segments[-1] += value.value
                else:
                    segments.append("")
            return [WILDCARD.join(segments)]

        if isinstance(node, ast.IfExp):
            return [*self.get_keys(node.body), *self.get_keys(node.orelse)]

        if isinstance(node, ast.BoolOp):
            if isinstance(node.op, ast.Or):
                return [key for value in node.values for key in self.get_keys(value)]
            return self.get_keys(node.values[-1])

        if isinstance(node, NO_INFORMATION_TYPES):
            return [WILDCARD]

        self._warn(f"Unsupported node: {type(node).__name__}")
        return [None]
