# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Test cases for merging messages into PO files on disk."""

from unittest.mock import patch

import pytest

from po_extractor.errors import (
    ArgumentError,
    GitCommandError,
    MissingContextError,
    UnsavedChangesError,
)
from po_extractor.translation_utilities.config import MergeOptions
from po_extractor.translation_utilities.write import Merger

GIT_STATUS = "po_extractor.translation_utilities.write.git_file_status"


def _merger(base_dir, **kwargs):
    kwargs.setdefault("git_check", False)
    return Merger(MergeOptions(base_dir=base_dir, **kwargs))


def test_get_merge_po_result(base_dir):
    """Test that a merge result is built without writing."""
    msgs = [{"key": "m1", "refs": ["file1.js:1"]}]
    before = (base_dir / "locale" / "blank.po").read_bytes()

    result = _merger(base_dir).get_merge_po_result("locale/blank.po", msgs)

    assert list(result.catalog.translations[""]) == ["m1"]
    assert result.file == "locale/blank.po"
    assert b'msgid "m1"' in result.content
    assert result.source_content == before
    assert (base_dir / "locale" / "blank.po").read_bytes() == before


def test_get_merge_po_result_keeps_source_catalog(base_dir):
    """Test that the source catalog keeps the old extracted comment."""
    msgs = [{"key": "m2", "refs": ["file1.js:2"], "comments": ["new-comment"]}]

    result = _merger(base_dir).get_merge_po_result("locale/en.po", msgs)

    assert result.catalog.translations[""]["m2"].comments.extracted == "new-comment"
    assert (
        result.source_catalog.translations[""]["m2"].comments.extracted
        == "extracted-existing"
    )


def test_replace_option_selects_catalog(base_dir):
    """Test that replace drops entries that are no longer extracted."""
    msgs = [{"key": "m1", "refs": ["a.py:1"]}]

    patched = _merger(base_dir).get_merge_po_result("locale/en.po", msgs)
    replaced = _merger(base_dir, replace=True).get_merge_po_result(
        "locale/en.po", msgs
    )

    assert list(patched.catalog.translations[""]) == ["m1", "m2"]
    assert list(replaced.catalog.translations[""]) == ["m1"]


def test_merge_po_writes(base_dir):
    """Test that merge_po writes the merged file back."""
    file = base_dir / "locale" / "blank.po"

    result = _merger(base_dir).merge_po(file, [{"key": "m1", "refs": ["a.py:1"]}])

    assert result.written
    content = file.read_text(encoding="utf-8")
    assert 'msgid "m1"' in content
    assert "#: a.py:1" in content


def test_merge_po_unchanged_is_not_written(base_dir):
    """Test that a second identical merge leaves the file alone."""
    msgs = [{"key": "m1", "refs": ["a.py:1"]}, {"key": "m2", "refs": ["a.py:2"]}]
    merger = _merger(base_dir)
    merger.merge_po("locale/en.po", msgs)

    result = merger.merge_po("locale/en.po", msgs)

    assert not result.is_change
    assert not result.written


def test_force_save(base_dir):
    """Test that force_save writes even without changes."""
    msgs = [{"key": "m1", "refs": ["a.py:1"]}, {"key": "m2", "refs": ["a.py:2"]}]
    _merger(base_dir).merge_po("locale/en.po", msgs)

    result = _merger(base_dir, force_save=True).merge_po("locale/en.po", msgs)

    assert result.written


def test_dry_run(base_dir):
    """Test that a dry run does not write."""
    file = base_dir / "locale" / "blank.po"
    before = file.read_bytes()

    result = _merger(base_dir, dry_run=True).merge_po(file, [{"key": "m1"}])

    assert result.is_change
    assert not result.written
    assert file.read_bytes() == before


def test_dry_run_from_environment(base_dir, monkeypatch):
    """Test that the DRY_RUN environment variable forces a dry run."""
    monkeypatch.setenv("DRY_RUN", "1")

    assert _merger(base_dir).options.dry_run


def test_merge_po_to(base_dir):
    """Test that the merged file is written to another path."""
    dest = base_dir / "output" / "msgs.po"

    result = _merger(base_dir).merge_po_to(
        "locale/blank.po", dest, [{"key": "m1", "refs": ["a.py:1"]}]
    )

    assert dest.exists()
    assert result.file == "output/msgs.po"
    assert result.source_file == "locale/blank.po"
    assert "m1" not in (base_dir / "locale" / "blank.po").read_text(encoding="utf-8")


def test_merge_pos(base_dir):
    """Test merging one message into several files."""
    msgs = [{"key": "m-new", "refs": ["file-9.js:100"]}]

    results = _merger(base_dir).merge_pos(["locale/en.po", "locale/fr.po"], msgs)

    assert len(results) == 2
    assert results[0].catalog.headers["Language"] == "en"
    assert results[1].catalog.headers["Language"] == "fr"
    for name in ("en.po", "fr.po"):
        content = (base_dir / "locale" / name).read_text(encoding="utf-8")
        assert 'msgid "m-new"' in content


def test_merge_pos_to(base_dir):
    """Test that files are written below the destination directory."""
    msgs = [{"key": "m-new", "refs": ["file-9.js:100"]}]

    results = _merger(base_dir).merge_pos_to("locale/*.po", "new", msgs)

    assert [result.file for result in results] == [
        "new/blank.po",
        "new/en.po",
        "new/fr.po",
    ]
    assert 'msgid "m-new"' in (base_dir / "new" / "en.po").read_text(encoding="utf-8")


def test_merge_pos_no_files(base_dir):
    """Test that no matching files gives an empty result."""
    assert _merger(base_dir).merge_pos("missing/*.po", [{"key": "m1"}]) == []


def test_invalid_messages(base_dir):
    """Test that messages must be a list."""
    with pytest.raises(ArgumentError):
        _merger(base_dir).merge_po("locale/en.po", "m1")


def test_missing_context(base_dir):
    """Test that an unknown context is reported."""
    with pytest.raises(MissingContextError):
        _merger(base_dir, context="nope").merge_po("locale/en.po", [{"key": "m1"}])


def test_git_check_refuses_modified_file(base_dir):
    """Test that a file with uncommitted changes is not overwritten."""
    file = base_dir / "locale" / "blank.po"
    before = file.read_bytes()

    with patch(GIT_STATUS, return_value="modified"):
        with pytest.raises(UnsavedChangesError):
            _merger(base_dir, git_check=True).merge_po(file, [{"key": "m1"}])

    assert file.read_bytes() == before


@pytest.mark.parametrize("status", ["clean", "added", "staged"])
def test_git_check_allows_committed_file(base_dir, status):
    """Test that clean, added and staged files may be written."""
    with patch(GIT_STATUS, return_value=status) as mock_status:
        result = _merger(base_dir, git_check=True).merge_po(
            "locale/blank.po", [{"key": "m1"}]
        )

    assert result.written
    mock_status.assert_called_once_with(base_dir.resolve() / "locale" / "blank.po")


def test_git_check_error(base_dir):
    """Test that a failing git command aborts the write."""
    with patch(GIT_STATUS, side_effect=GitCommandError("not a git repository")):
        with pytest.raises(GitCommandError):
            _merger(base_dir, git_check=True).merge_po(
                "locale/blank.po", [{"key": "m1"}]
            )


def test_merge_pos_checks_every_file_first(base_dir):
    """Test that no file is written when one of them is dirty."""
    en = base_dir / "locale" / "en.po"
    before = en.read_bytes()

    def status(file):
        return "modified" if file.name == "fr.po" else "clean"

    with patch(GIT_STATUS, side_effect=status):
        with pytest.raises(UnsavedChangesError):
            _merger(base_dir, git_check=True).merge_pos(
                ["locale/en.po", "locale/fr.po"], [{"key": "m1"}]
            )

    assert en.read_bytes() == before


def test_dest_path(base_dir):
    """Test that the first directory of the source path is dropped."""
    merger = _merger(base_dir)

    dest = merger.dest_path("locale/de/messages.po", "build")

    assert dest == base_dir.resolve() / "build" / "de" / "messages.po"
