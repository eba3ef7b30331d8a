# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Errors raised while extracting and merging messages."""


class PoExtractorError(Exception):
    """Base class for all po-extractor errors."""


class ArgumentError(PoExtractorError, ValueError):
    """Invalid argument or option passed by the caller."""


class MissingContextError(PoExtractorError):
    """The requested context is absent from the catalog."""


class DuplicateKeyError(PoExtractorError):
    """The same msgid was supplied twice to one merge call."""


class ConflictError(PoExtractorError):
    """Contradictory comments were extracted for the same reference."""


class WriteGuardError(PoExtractorError):
    """A precondition for writing a catalog file failed."""


class UnsavedChangesError(WriteGuardError):
    """The destination file has uncommitted changes in git."""


class GitCommandError(WriteGuardError):
    """Running git failed or git exited with a non-zero status."""

    def __init__(self, message, returncode=None, stderr=None):
        """Constructor."""
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
