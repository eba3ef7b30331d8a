# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Extract translatable strings from Python code and merge them into PO files."""

from .errors import (
    ArgumentError,
    ConflictError,
    DuplicateKeyError,
    GitCommandError,
    MissingContextError,
    PoExtractorError,
    UnsavedChangesError,
    WriteGuardError,
)
from .translation_utilities import (
    Catalog,
    ExtractedMessage,
    ExtractOptions,
    Extractor,
    MergeOptions,
    Merger,
    ReferenceOptions,
    merge_catalog,
)

__version__ = "0.1.0"

__all__ = (
    "__version__",
    "ArgumentError",
    "Catalog",
    "ConflictError",
    "DuplicateKeyError",
    "ExtractOptions",
    "ExtractedMessage",
    "Extractor",
    "GitCommandError",
    "MergeOptions",
    "Merger",
    "MissingContextError",
    "PoExtractorError",
    "ReferenceOptions",
    "UnsavedChangesError",
    "WriteGuardError",
    "merge_catalog",
)
