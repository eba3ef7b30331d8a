# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.
"""File helpers."""

from __future__ import annotations

from json import dump
from pathlib import Path


def write_json_file(path: Path, data) -> None:
    """Write ``data`` as indented UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        dump(data, fp, indent=2, ensure_ascii=False)
        fp.write("\n")
