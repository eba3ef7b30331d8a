# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""In-memory catalog model and its conversion from and to PO text.

Parsing and rendering is done by polib. Entries are grouped by context:

.. code-block:: python

    catalog = load_catalog(Path("locale/de.po"))
    entry = catalog.translations[""]["Save"]
    entry.msgstr  # ['Speichern']
    content = render_catalog(catalog)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

import polib

HEADER_CONTEXT = ""


@dataclass
class EntryComments:
    """Comments attached to an entry."""

    translator: Optional[str] = None
    extracted: Optional[str] = None
    reference: Optional[str] = None

    def __bool__(self):
        """Whether any comment is set."""
        return bool(self.translator or self.extracted or self.reference)


@dataclass
class TranslationEntry:
    """A single catalog entry."""

    msgid: str
    msgstr: list[str] = field(default_factory=lambda: [""])
    msgctxt: Optional[str] = None
    msgid_plural: Optional[str] = None
    comments: Optional[EntryComments] = None
    flags: list[str] = field(default_factory=list)
    previous_msgid: Optional[str] = None
    previous_msgctxt: Optional[str] = None
    obsolete: bool = False

    def copy(self) -> TranslationEntry:
        """Return a copy that shares no mutable state with this entry."""
        return replace(
            self,
            msgstr=list(self.msgstr),
            flags=list(self.flags),
            comments=replace(self.comments) if self.comments is not None else None,
        )

    @property
    def is_translated(self) -> bool:
        """Whether at least one msgstr is non-empty."""
        return any(self.msgstr)


@dataclass
class Catalog:
    """A parsed PO file.

    ``translations`` maps context -> msgid -> entry. The ``""`` context
    holds the header echo entry with an empty msgid.
    """

    headers: dict[str, str] = field(default_factory=dict)
    translations: dict[str, dict[str, TranslationEntry]] = field(
        default_factory=lambda: {HEADER_CONTEXT: {}}
    )
    header_comment: str = ""
    header_fuzzy: bool = False
    obsolete: list[TranslationEntry] = field(default_factory=list)
    charset: str = "utf-8"

    def with_context(
        self, context: str, translations: dict[str, TranslationEntry]
    ) -> Catalog:
        """Shallow copy with only the bucket of ``context`` replaced."""
        return replace(
            self, translations={**self.translations, context: translations}
        )

    def count(self, context: str = HEADER_CONTEXT) -> int:
        """Number of entries in a context, without the header echo."""
        return sum(1 for msgid in self.translations.get(context, {}) if msgid)


class CommentPOEntry(polib.POEntry):
    """POEntry that writes its comments line by line, without wrapping.

    polib wraps ``#.`` and ``# `` comments at ``wrapwidth`` and rewraps
    occurrences; read back, a wrapped comment gains newlines. Here every line
    of ``comment`` and ``tcomment`` is written as is, and every line of
    ``reference`` becomes its own ``#:`` line, keeping the layout computed by
    :func:`~.references.build_reference`.
    """

    def __init__(self, *args, **kwargs):
        """Constructor."""
        self.reference = kwargs.pop("reference", None)
        super().__init__(*args, **kwargs)

    def __unicode__(self, wrapwidth=78):
        """Render the entry."""
        comment, tcomment = self.comment, self.tcomment
        self.comment = self.tcomment = ""
        try:
            text = super().__unicode__(wrapwidth)
        finally:
            self.comment, self.tcomment = comment, tcomment

        lines = []
        if comment and not self.obsolete:
            lines += [f"#. {line}" for line in comment.split("\n")]
        if tcomment:
            lines += [f"# {line}" for line in tcomment.split("\n")]
        if self.reference and not self.obsolete:
            lines += [f"#: {line}" for line in self.reference.split("\n") if line]
        return "\n".join(lines + [text])


def _header_text(headers: dict[str, str]) -> str:
    return "".join(f"{key}: {value}\n" for key, value in headers.items())


def _charset_from_headers(headers: dict[str, str], default: str) -> str:
    for key, value in headers.items():
        if key.lower() != "content-type":
            continue
        for part in value.split(";"):
            name, sep, charset = part.strip().partition("=")
            if sep and name.strip().lower() == "charset" and charset.strip():
                charset = charset.strip()
                if charset.upper() == "CHARSET":
                    return default
                return charset
    return default


def entry_from_polib(entry: polib.POEntry) -> TranslationEntry:
    """Convert a polib entry."""
    if entry.msgid_plural:
        msgstr = [entry.msgstr_plural[idx] for idx in sorted(entry.msgstr_plural)]
    else:
        msgstr = [entry.msgstr]
    reference = " ".join(
        f"{path}:{line}" if line else path for path, line in entry.occurrences
    )
    comments = EntryComments(
        translator=entry.tcomment or None,
        extracted=entry.comment or None,
        reference=reference or None,
    )
    return TranslationEntry(
        msgid=entry.msgid,
        msgstr=msgstr or [""],
        msgctxt=entry.msgctxt,
        msgid_plural=entry.msgid_plural or None,
        comments=comments if comments else None,
        flags=list(entry.flags),
        previous_msgid=entry.previous_msgid,
        previous_msgctxt=entry.previous_msgctxt,
        obsolete=entry.obsolete,
    )


def entry_to_polib(tran: TranslationEntry) -> CommentPOEntry:
    """Convert an entry to polib."""
    comments = tran.comments or EntryComments()
    kwargs = {
        "msgid": tran.msgid,
        "msgctxt": tran.msgctxt,
        "tcomment": comments.translator or "",
        "comment": comments.extracted or "",
        "reference": comments.reference,
        "flags": list(tran.flags),
        "previous_msgid": tran.previous_msgid,
        "previous_msgctxt": tran.previous_msgctxt,
        "obsolete": tran.obsolete,
    }
    if tran.msgid_plural:
        kwargs["msgid_plural"] = tran.msgid_plural
        kwargs["msgstr_plural"] = dict(enumerate(tran.msgstr))
    else:
        kwargs["msgstr"] = tran.msgstr[0] if tran.msgstr else ""
    return CommentPOEntry(**kwargs)


def parse_catalog(content: Union[bytes, str], charset: str = "utf-8") -> Catalog:
    """Parse PO text into a :class:`Catalog`.

    :param content: The PO file content
    :param charset: Charset used to decode ``content`` when it is bytes
    :raises ValueError: If the content is not valid PO syntax
    """
    if isinstance(content, bytes):
        content = content.decode(charset)
    po_file = polib.pofile(content, encoding=charset)

    headers = dict(po_file.metadata)
    catalog = Catalog(
        headers=headers,
        header_comment=po_file.header,
        header_fuzzy=bool(po_file.metadata_is_fuzzy),
        charset=_charset_from_headers(headers, charset),
    )
    catalog.translations[HEADER_CONTEXT][""] = TranslationEntry(
        msgid="", msgstr=[_header_text(headers)]
    )
    for entry in po_file:
        tran = entry_from_polib(entry)
        if tran.obsolete:
            catalog.obsolete.append(tran)
            continue
        context = tran.msgctxt or HEADER_CONTEXT
        catalog.translations.setdefault(context, {})[tran.msgid] = tran
    return catalog


def load_catalog(path: Path, charset: str = "utf-8") -> Catalog:
    """Read and parse a PO file."""
    return parse_catalog(Path(path).read_bytes(), charset)


def render_catalog(catalog: Catalog, wrapwidth: int = 78) -> bytes:
    """Render a catalog as PO text in the catalog's charset."""
    po_file = polib.POFile(wrapwidth=wrapwidth, encoding=catalog.charset)
    po_file.header = catalog.header_comment
    po_file.metadata = dict(catalog.headers)
    po_file.metadata_is_fuzzy = catalog.header_fuzzy
    for translations in catalog.translations.values():
        for tran in translations.values():
            if tran.msgid:
                po_file.append(entry_to_polib(tran))
    for tran in catalog.obsolete:
        po_file.append(entry_to_polib(tran))
    return str(po_file).encode(catalog.charset)
