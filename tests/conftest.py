# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Pytest fixtures."""

import pytest

from po_extractor.translation_utilities.catalog import parse_catalog

BLANK_PO = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"
"""

EN_PO = """\
msgid ""
msgstr ""
"Language: en\\n"
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "m1"
msgstr "m1t"

#. extracted-existing
msgid "m2"
msgstr "m2t"
"""

FR_PO = """\
msgid ""
msgstr ""
"Language: fr\\n"
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "m1"
msgstr "m1 fr"

msgid "m2"
msgstr ""
"""


@pytest.fixture
def blank_catalog():
    """Catalog without any message."""
    return parse_catalog(BLANK_PO)


@pytest.fixture
def en_catalog():
    """Catalog with m1 and m2 translated."""
    return parse_catalog(EN_PO)


@pytest.fixture
def base_dir(tmp_path):
    """Project directory with a few sources and a locale directory."""
    locale = tmp_path / "locale"
    locale.mkdir()
    (locale / "blank.po").write_text(BLANK_PO, encoding="utf-8")
    (locale / "en.po").write_text(EN_PO, encoding="utf-8")
    (locale / "fr.po").write_text(FR_PO, encoding="utf-8")

    src = tmp_path / "src"
    src.mkdir()
    (src / "app.py").write_text(
        "from gettext import gettext as _\n"
        "\n"
        "# Button label\n"
        'SAVE = _("Save")\n'
        'CANCEL = _("Cancel")\n',
        encoding="utf-8",
    )
    (src / "views.py").write_text(
        "from gettext import gettext as _\n"
        "\n"
        "\n"
        "def title():\n"
        '    return _("Save")\n',
        encoding="utf-8",
    )
    return tmp_path
