# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Test cases for the Python source scanner."""

import pytest

from po_extractor.errors import ArgumentError
from po_extractor.translation_utilities.config import CommentOptions, ExtractOptions
from po_extractor.translation_utilities.scanner import SourceScanner


def _keys(source, echo=None, **kwargs):
    scanner = SourceScanner(ExtractOptions(**kwargs), echo=echo)
    return [message.key for message in scanner.scan(source, "file.py")]


@pytest.mark.parametrize(
    "source, keys",
    [
        ('_("Hello")', ["Hello"]),
        ('gettext("Hello")', ["Hello"]),
        ('_("Hello, " + "world")', ["Hello, world"]),
        ('_(f"Hi {name}!")', ["Hi *!"]),
        ('_(f"{a}{b}")', ["**"]),
        ('_("yes" if ok else "no")', ["yes", "no"]),
        ('_("first" or "second")', ["first", "second"]),
        ('_(flag and "second")', ["second"]),
        ("_(get_label())", ["*"]),
        ("_(label)", ["*"]),
        ("_(self.label)", ["*"]),
        ('other("Hello")', []),
        ("_()", []),
    ],
)
def test_key_resolution(source, keys):
    """Test that argument expressions resolve to the expected keys."""
    assert _keys(source) == keys


def test_unsupported_node_warns():
    """Test that an unsupported argument is skipped with a warning."""
    warnings = []

    keys = _keys('_(["Hello"])', echo=lambda msg, **kw: warnings.append(msg))

    assert keys == []
    assert warnings == ["file.py:1: Unsupported node: List"]


def test_ambiguous_concatenation_skipped():
    """Test that concatenating several candidate keys is skipped."""
    warnings = []

    keys = _keys(
        '_(("a" if x else "b") + "c")', echo=lambda msg, **kw: warnings.append(msg)
    )

    assert keys == []
    assert len(warnings) == 1
    assert "binary expression" in warnings[0]


def test_concatenation_with_number_skipped():
    """Test that concatenating a non-string constant is skipped."""
    assert _keys('_("a" + 1)') == []


def test_arg_pos():
    """Test that the message argument position is configurable."""
    source = 'ngettext(n, "one", "many")'

    assert _keys(source, markers=("ngettext",), arg_pos=1) == ["one"]
    assert _keys(source, markers=("ngettext",), arg_pos=-1) == ["many"]
    assert _keys(source, markers=("ngettext",), arg_pos=5) == []


def test_members():
    """Test that attribute calls only match with members enabled."""
    source = 'self._("Hello")'

    assert _keys(source) == []
    assert _keys(source, members=True) == ["Hello"]


def test_nested_calls_are_visited():
    """Test that marker calls inside other calls are found."""
    source = 'print(_("Hello"), fmt(_("World")))'

    assert _keys(source) == ["Hello", "World"]


def test_comments_above_and_inline():
    """Test that comments on the line above and the call line are used."""
    source = "# Button label\n" '_("Save")  # short\n' '_("Cancel")\n'
    scanner = SourceScanner(ExtractOptions())

    messages = scanner.scan(source, "file.py")

    assert [(m.key, m.line, m.comment) for m in messages] == [
        ("Save", 2, "Button label\nshort"),
        ("Cancel", 3, None),
    ]


def test_comment_used_once():
    """Test that a comment goes to the first call on its line only."""
    source = "# note\n" '_("a"); _("b")\n'
    scanner = SourceScanner(ExtractOptions())

    messages = scanner.scan(source, "file.py")

    assert [(m.key, m.comment) for m in messages] == [("a", "note"), ("b", None)]


def test_declared_key_comment():
    """Test that a key can be declared with a comment."""
    source = "# for the admin\n" "# i18n-extract Declared key\n" "x = 1\n"
    scanner = SourceScanner(ExtractOptions())

    messages = scanner.scan(source, "file.py")

    assert [(m.key, m.line, m.comment) for m in messages] == [
        ("Declared key", 2, "for the admin")
    ]


def test_ignore_line():
    """Test that calls ending on an ignored line are skipped."""
    source = '_("skip")  # i18n-ignore-line\n' '_("keep")\n'
    scanner = SourceScanner(ExtractOptions())

    messages = scanner.scan(source, "file.py")

    assert [(m.key, m.comment) for m in messages] == [("keep", None)]


def test_comments_disabled():
    """Test that disabling comments turns off all comment handling."""
    source = "# note\n" '_("a")  # i18n-ignore-line\n' "# i18n-extract Declared\n"

    keys = _keys(source, comments=False)

    assert keys == ["a"]


def test_comment_extraction_off_keeps_directives():
    """Test that extract=False keeps the key and ignore directives."""
    source = "# note\n" '_("a")\n' "# i18n-extract Declared\n"
    scanner = SourceScanner(ExtractOptions(comments=CommentOptions(extract=False)))

    messages = scanner.scan(source, "file.py")

    assert [(m.key, m.comment) for m in messages] == [("Declared", None), ("a", None)]


def test_invalid_regex():
    """Test that an invalid comment regex is rejected."""
    with pytest.raises(ArgumentError):
        SourceScanner(ExtractOptions(comments={"key_regex": "("}))


def test_syntax_error():
    """Test that invalid Python raises SyntaxError."""
    scanner = SourceScanner(ExtractOptions())

    with pytest.raises(SyntaxError):
        scanner.scan('_("a"', "file.py")
