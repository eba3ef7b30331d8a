# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Test cases for helpers and option objects."""

import json
from subprocess import CompletedProcess
from unittest.mock import patch

import pytest

from po_extractor.errors import ArgumentError, GitCommandError
from po_extractor.translation_utilities.config import (
    CommentOptions,
    ExtractOptions,
    MergeOptions,
    ReferenceOptions,
    load_config_file,
)
from po_extractor.utils import glob_files, git_file_status, rel_path


def _completed(stdout="", returncode=0, stderr=""):
    return CompletedProcess(["git"], returncode, stdout=stdout, stderr=stderr)


@pytest.mark.parametrize(
    "stdout, status",
    [
        ("", "clean"),
        ("?? en.po\n", "untracked"),
        ("M  en.po\n", "staged"),
        ("A  en.po\n", "added"),
        (" M en.po\n", "modified"),
        ("MM en.po\n", "modified"),
    ],
)
def test_git_file_status(tmp_path, stdout, status):
    """Test that porcelain output maps to a status."""
    with patch("po_extractor.utils.run", return_value=_completed(stdout)) as mock_run:
        assert git_file_status(tmp_path / "en.po") == status

    args, kwargs = mock_run.call_args
    assert args[0] == ["git", "status", "--porcelain=v1", "--", "en.po"]
    assert kwargs["cwd"] == tmp_path


def test_git_file_status_errors(tmp_path):
    """Test that git failures raise GitCommandError."""
    failed = _completed(returncode=128, stderr="fatal: not a git repository")
    with patch("po_extractor.utils.run", return_value=failed):
        with pytest.raises(GitCommandError) as excinfo:
            git_file_status(tmp_path / "en.po")
    assert excinfo.value.returncode == 128
    assert "not a git repository" in excinfo.value.stderr

    with patch("po_extractor.utils.run", side_effect=FileNotFoundError("git")):
        with pytest.raises(GitCommandError):
            git_file_status(tmp_path / "en.po")


def test_glob_files(base_dir):
    """Test that paths and patterns expand without duplicates."""
    files = glob_files(base_dir, ["locale/en.po", "locale/*.po"])

    assert [file.name for file in files] == ["en.po", "blank.po", "fr.po"]


def test_glob_files_empty(base_dir):
    """Test that an empty pattern list is rejected."""
    with pytest.raises(ArgumentError):
        glob_files(base_dir, [])


def test_rel_path(tmp_path):
    """Test that paths are made relative with forward slashes."""
    assert rel_path(tmp_path, tmp_path / "a" / "b.py") == "a/b.py"
    assert rel_path(tmp_path, "already/relative.py") == "already/relative.py"


def test_reference_options_shorthand():
    """Test that shorthand values resolve to ReferenceOptions."""
    assert ReferenceOptions.from_value(True) == ReferenceOptions()
    assert ReferenceOptions.from_value(False).enabled is False
    assert ReferenceOptions.from_value({"per_line": 2}).per_line == 2
    with pytest.raises(ArgumentError):
        ReferenceOptions.from_value({"perLine": 2})


def test_comment_options_shorthand():
    """Test that False disables every comment feature."""
    options = CommentOptions.from_value(False)

    assert options == CommentOptions(extract=False, key_regex=None, ignore_regex=None)


def test_extract_options_normalize(tmp_path):
    """Test that extract options are normalized once."""
    options = ExtractOptions(
        base_dir=str(tmp_path), markers=["_", "_", "ngettext"], comments=False
    )

    assert options.base_dir == tmp_path
    assert options.markers == ("_", "ngettext")
    assert options.comments.extract is False
    with pytest.raises(ArgumentError):
        ExtractOptions(markers=())


def test_merge_options_from_mapping(tmp_path):
    """Test building merge options from a mapping."""
    options = MergeOptions.from_mapping(
        {"base_dir": tmp_path, "sort": "msgid", "references": {"max": 3}}
    )

    assert options.sort == "msgid"
    assert options.references.max == 3
    with pytest.raises(ArgumentError):
        MergeOptions.from_mapping({"unknown": 1})
    with pytest.raises(ArgumentError):
        MergeOptions(context=None)


def test_load_config_file(tmp_path):
    """Test reading the JSON config file."""
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"merge": {"sort": "msgid"}, "extract": {"markers": ["t"]}}),
        encoding="utf-8",
    )

    assert load_config_file(path) == {
        "extract": {"markers": ["t"]},
        "merge": {"sort": "msgid"},
    }

    path.write_text(json.dumps({"other": {}}), encoding="utf-8")
    with pytest.raises(ArgumentError):
        load_config_file(path)

    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ArgumentError):
        load_config_file(path)
