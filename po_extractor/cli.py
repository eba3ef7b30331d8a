# -*- coding: utf-8 -*-
#
# This file is part of po-extractor.
# Copyright (C) 2025 po-extractor contributors.
#
# po-extractor is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""CLI for po-extractor."""

import sys
from dataclasses import replace
from functools import partial
from json import dumps
from pathlib import Path
from typing import Optional

import rich_click as click
from rich_click import INT, STRING
from rich_click import Path as ClickPath
from rich_click import argument, group, option, secho

from .errors import PoExtractorError
from .translation_utilities.audit import (
    audit_catalogs,
    log_audit_summary,
    write_audit_report,
)
from .translation_utilities.config import (
    CommentOptions,
    ExtractOptions,
    MergeOptions,
    ReferenceOptions,
    load_config_file,
)
from .translation_utilities.extract import Extractor
from .translation_utilities.io import write_json_file
from .translation_utilities.write import Merger
from .utils import convert_to_list, ensure_parent_directory, glob_files

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.USE_MARKDOWN = False


def _overlay(section: dict, **values) -> dict:
    """Config file section with the options given on the command line on top."""
    merged = dict(section)
    merged.update({key: value for key, value in values.items() if value is not None})
    return merged


def _load_sections(config_file: Optional[Path]) -> dict:
    if config_file is None:
        return {"extract": {}, "merge": {}}
    return load_config_file(config_file)


def build_extract_options(
    section: dict,
    base_dir: Optional[Path],
    context: Optional[str],
    verbose: int,
    markers: list[str],
    arg_pos: Optional[int],
    members: Optional[bool],
    comments: Optional[bool],
) -> ExtractOptions:
    """Extract options from the config file section and the command line."""
    values = _overlay(
        section,
        base_dir=base_dir,
        context=context,
        markers=tuple(markers) or None,
        arg_pos=arg_pos,
        members=members,
        verbose=verbose or None,
    )
    options = ExtractOptions.from_mapping(values)
    if comments is not None:
        options.comments = replace(
            CommentOptions.from_value(options.comments), extract=comments
        )
    return options


def build_merge_options(
    section: dict,
    base_dir: Optional[Path],
    context: Optional[str],
    verbose: int,
    *,
    sort: Optional[str],
    replace_catalog: Optional[bool],
    dry_run: bool,
    force_save: bool,
    git_check: Optional[bool],
    references: Optional[bool],
    refs_max: Optional[int],
    refs_per_file: Optional[int],
    refs_per_line: Optional[int],
    refs_line_length: Optional[int],
) -> MergeOptions:
    """Merge options from the config file section and the command line."""
    reference_options = ReferenceOptions.from_value(section.get("references"))
    reference_options = replace(
        reference_options,
        **_overlay(
            {},
            enabled=references,
            max=refs_max,
            per_file=refs_per_file,
            per_line=refs_per_line,
            line_length=refs_line_length,
        ),
    )
    values = _overlay(
        section,
        base_dir=base_dir,
        context=context,
        sort=sort,
        replace=replace_catalog,
        dry_run=dry_run or None,
        force_save=force_save or None,
        git_check=git_check,
        verbose=verbose or None,
    )
    values["references"] = reference_options
    return MergeOptions.from_mapping(values)


def _fail(message: str, code: int = 1):
    secho(f"Error: {message}", fg="red", err=True)
    sys.exit(code)


base_dir_option = option(
    "--base-dir",
    "-C",
    type=ClickPath(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory that paths, globs and references are relative to. Default: cwd",
)
config_option = option(
    "--config",
    "config_file",
    type=ClickPath(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file with 'extract' and 'merge' option sections.",
)
context_option = option(
    "--context", type=STRING, default=None, help="Message context (msgctxt)."
)
verbose_option = option("--verbose", "-v", count=True, help="More output.")


def extract_options(func):
    """Options of the source scanner."""
    decorators = [
        option(
            "--marker",
            "-m",
            "markers",
            multiple=True,
            callback=convert_to_list,
            help="Function names that mark translatable strings. Default: _ gettext",
        ),
        option(
            "--arg-pos",
            type=INT,
            default=None,
            help="Position of the message argument, negative counts from the end.",
        ),
        option(
            "--members/--no-members",
            default=None,
            help="Also match attribute calls like self._().",
        ),
        option(
            "--comments/--no-comments",
            default=None,
            help="Extract source comments next to marker calls.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@group()
def cli():
    """Extract translatable strings and merge them into PO files."""


@cli.command("extract")
@argument("globs", nargs=-1, required=True)
@base_dir_option
@config_option
@context_option
@verbose_option
@extract_options
@option(
    "--output",
    "-o",
    "output_file",
    type=ClickPath(dir_okay=False, file_okay=True, writable=True, path_type=Path),
    callback=ensure_parent_directory,
    default=None,
    help="Write the messages to this JSON file instead of stdout.",
)
def extract(
    globs,
    base_dir,
    config_file,
    context,
    verbose,
    markers,
    arg_pos,
    members,
    comments,
    output_file,
):
    """Extract messages from Python files and print them as JSON.

    Examples:
        po-extractor extract "src/**/*.py"
        po-extractor extract -m _ -m ngettext "src/**/*.py" -o messages.json
    """
    echo = partial(secho, err=True)
    try:
        sections = _load_sections(config_file)
        options = build_extract_options(
            sections["extract"],
            base_dir,
            context,
            verbose,
            markers,
            arg_pos,
            members,
            comments,
        )
        messages = Extractor(options, echo=echo).extract(list(globs))
    except PoExtractorError as err:
        _fail(str(err))

    data = [message.to_dict() for message in messages]
    if output_file:
        write_json_file(output_file, data)
        echo(f"Wrote {len(data)} messages to {output_file}", fg="green")
    else:
        click.echo(dumps(data, indent=2, ensure_ascii=False))


@cli.command("merge")
@argument("po_globs", nargs=-1, required=True)
@option(
    "--source",
    "-s",
    "sources",
    multiple=True,
    required=True,
    callback=convert_to_list,
    help="Source files or globs to extract from. Can be specified multiple times.",
)
@base_dir_option
@config_option
@context_option
@verbose_option
@extract_options
@option(
    "--sort",
    type=STRING,
    default=None,
    help="Entry order: source, msgid, msgid-desc or reference. Default: source",
)
@option(
    "--replace/--patch",
    "replace_catalog",
    default=None,
    help="Drop messages that are no longer found instead of keeping them.",
)
@option("--dry-run", is_flag=True, help="Do not write any file.")
@option("--force-save", is_flag=True, help="Write files even without changes.")
@option(
    "--git-check/--no-git-check",
    default=None,
    help="Refuse to overwrite files with uncommitted changes. Default: on",
)
@option(
    "--references/--no-references",
    default=None,
    help="Write #: reference comments. Default: on",
)
@option("--refs-max", type=INT, default=None, help="Max references per message.")
@option("--refs-per-file", type=INT, default=None, help="Max references per file.")
@option("--refs-per-line", type=INT, default=None, help="Max references per line.")
@option(
    "--refs-line-length", type=INT, default=None, help="Max length of a reference line."
)
@option(
    "--dest-dir",
    "-d",
    type=ClickPath(file_okay=False, dir_okay=True, writable=True, path_type=Path),
    default=None,
    help="Write merged files here instead of updating them in place.",
)
def merge(
    po_globs,
    sources,
    base_dir,
    config_file,
    context,
    verbose,
    markers,
    arg_pos,
    members,
    comments,
    sort,
    replace_catalog,
    dry_run,
    force_save,
    git_check,
    references,
    refs_max,
    refs_per_file,
    refs_per_line,
    refs_line_length,
    dest_dir,
):
    """Extract messages from sources and merge them into PO files.

    Each PO file is merged on its own: an error in one file is reported and
    the remaining files are still processed.

    Examples:
        po-extractor merge -s "src/**/*.py" "locale/*/LC_MESSAGES/messages.po"
        po-extractor merge -s "src/**/*.py" --replace --sort msgid locale/de.po
        po-extractor merge -s "src/**/*.py" -d build/locale "locale/**/*.po"
    """
    try:
        sections = _load_sections(config_file)
        extract_opts = build_extract_options(
            sections["extract"],
            base_dir,
            context,
            verbose,
            markers,
            arg_pos,
            members,
            comments,
        )
        merge_opts = build_merge_options(
            sections["merge"],
            base_dir,
            context,
            verbose,
            sort=sort,
            replace_catalog=replace_catalog,
            dry_run=dry_run,
            force_save=force_save,
            git_check=git_check,
            references=references,
            refs_max=refs_max,
            refs_per_file=refs_per_file,
            refs_per_line=refs_per_line,
            refs_line_length=refs_line_length,
        )
        messages = Extractor(extract_opts, echo=secho).extract(sources)
        merger = Merger(merge_opts, echo=secho)
        po_files = glob_files(merger.base_dir, list(po_globs))
    except PoExtractorError as err:
        _fail(str(err))

    if not po_files:
        secho("No po files found", fg="yellow")
        return

    failed = []
    for po_file in po_files:
        try:
            if dest_dir:
                result = merger.merge_po_to(
                    po_file, merger.dest_path(po_file, dest_dir), messages
                )
            else:
                result = merger.merge_po(po_file, messages)
        except (PoExtractorError, OSError, ValueError) as err:
            secho(f"Error: {merger.rel_path(po_file)}: {err}", fg="red")
            failed.append(po_file)
            continue
        counts = ", ".join(f"{key}={value}" for key, value in result.counts.items())
        secho(f"{result.file}: {counts}", fg="green" if result.written else None)

    if failed:
        _fail(f"{len(failed)} of {len(po_files)} po file(s) failed")


@cli.command("audit")
@argument("po_globs", nargs=-1, required=True)
@base_dir_option
@context_option
@option(
    "--charset", type=STRING, default="utf-8", help="Charset of the PO files."
)
@option(
    "--output-directory",
    "-o",
    type=ClickPath(
        exists=False, file_okay=False, dir_okay=True, writable=True, path_type=Path
    ),
    default=None,
    help="Also write audit-report.json into this directory.",
)
def audit(po_globs, base_dir, context, charset, output_directory):
    """List untranslated, fuzzy and obsolete messages of PO files.

    Examples:
        po-extractor audit "locale/*.po"
        po-extractor audit "locale/*.po" -o ./i18n-audit
    """
    try:
        summary = audit_catalogs(
            list(po_globs),
            context or "",
            base_dir or Path.cwd(),
            charset,
            echo=secho,
        )
    except (PoExtractorError, OSError, ValueError) as err:
        _fail(str(err))

    log_audit_summary(summary, secho)

    if output_directory:
        report_path = write_audit_report(summary, output_directory)
        secho(f"Audit report written: {report_path}", fg="green")

    secho(
        f"Summary: files={summary.total_files}, "
        f"untranslated={summary.untranslated_strings}, "
        f"fuzzy={summary.fuzzy_translations}, "
        f"obsolete={summary.obsolete_translations}",
    )
