from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from bibnotes.bibtex import parse_bibliography
from bibnotes.config import ImportConfig
from bibnotes.exceptions import BibliographyParseError, TemplateNotFoundError
from bibnotes.fields import extract_metadata
from bibnotes.models import FileResult, ParsedEntry, RunOutcome, RunSummary
from bibnotes.store import DocumentStore
from bibnotes.tags import build_file_name, combined_file_name, disambiguate
from bibnotes.template import TEMPLATE_FILENAME, build_replacements, populate
from bibnotes.utils import date_stamp, iso_date, utc_now

log = logging.getLogger(__name__)

BIB_EXTENSION = "bib"
COMBINED_SEPARATOR = "\n\n---\n\n"

MSG_NO_FILES = "No BibTeX files found in your vault."
MSG_SUCCESS = "BibTeX entries imported successfully!"

Parser = Callable[[str], list[ParsedEntry]]


class ImportState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    READING = "reading"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    RENDERING = "rendering"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


def template_location(config: ImportConfig, store: DocumentStore) -> str:
    """The host's template folder wins over ``config.template_path`` when the store exposes one."""
    folder = store.template_folder()
    return f"{folder}/{TEMPLATE_FILENAME}" if folder else config.template_path


def resolve_template(config: ImportConfig, store: DocumentStore) -> tuple[str, str]:
    path = template_location(config, store)
    if store.get_by_path(path) is None:
        raise TemplateNotFoundError(path)
    try:
        return path, store.read(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateNotFoundError(path) from exc


class _Importer:
    def __init__(
        self,
        config: ImportConfig,
        store: DocumentStore,
        template: str,
        parse: Parser,
        now: datetime,
        dry_run: bool,
    ) -> None:
        self.config = config
        self.store = store
        self.template = template
        self.parse = parse
        self.now = now
        self.dry_run = dry_run
        self.state = ImportState.IDLE
        self._taken: set[str] = set()
        self._folder_ready = False

    def _enter(self, state: ImportState, detail: str = "") -> None:
        self.state = state
        log.debug("state=%s %s", state.value, detail)

    def run_file(self, path: str) -> FileResult:
        result = FileResult(path=path, ok=True)
        try:
            self._enter(ImportState.READING, path)
            text = self.store.read(path)
            self._enter(ImportState.PARSING, path)
            entries = self.parse(text)
        except (BibliographyParseError, OSError, UnicodeDecodeError) as exc:
            log.warning("Skipping %s: %s", path, exc)
            result.ok = False
            result.reason = str(exc)
            return result

        selected = entries[: self.config.entry_limit]
        log.info("Processing %s (%d of %d entries)", path, len(selected), len(entries))

        rendered: list[tuple[str, str]] = []
        for entry in selected:
            self._enter(ImportState.EXTRACTING, entry.key)
            meta = extract_metadata(entry, today=self.now.date())
            self._enter(ImportState.RENDERING, entry.key)
            populated = populate(self.template, build_replacements(meta))
            for name in populated.unresolved:
                log.warning("No replacement found for placeholder {{%s}} in %s", name, entry.key or path)
            result.unresolved.extend(populated.unresolved)
            rendered.append((build_file_name(meta, date_stamp(self.now), self.config), populated.text))

        if self.config.combine_entries and rendered:
            name = combined_file_name(iso_date(self.now.date()), self.config)
            rendered = [(name, COMBINED_SEPARATOR.join(text for _, text in rendered))]
        try:
            for name, text in rendered:
                result.notes.append(self._write(name, text))
        except OSError as exc:
            log.warning("Stopped writing notes for %s: %s", path, exc)
            result.ok = False
            result.reason = str(exc)
        return result

    def finish(self) -> None:
        self._enter(ImportState.DONE)

    def _write(self, file_name: str, content: str) -> str:
        folder = self.config.notes_folder
        target = disambiguate(f"{folder}/{file_name}", self._taken, self.store.exists)
        self._taken.add(target)
        self._enter(ImportState.WRITING, target)
        if self.dry_run:
            log.info("Would create %s", target)
            return target
        if not self._folder_ready and not self.store.exists(folder):
            self.store.create_folder(folder)
        self._folder_ready = True
        self.store.create(target, content)
        log.info("Created %s", target)
        return target


def run_import(
    config: ImportConfig,
    store: DocumentStore,
    *,
    parse: Parser = parse_bibliography,
    now: datetime | None = None,
    dry_run: bool = False,
) -> RunSummary:
    now = now or utc_now()
    log.debug("state=%s", ImportState.SCANNING.value)
    files = sorted(store.list_files(BIB_EXTENSION))
    if not files:
        log.info(MSG_NO_FILES)
        return RunSummary(outcome=RunOutcome.NO_FILES, message=MSG_NO_FILES)
    log.info("Found %d BibTeX file(s)", len(files))

    try:
        template_path, template = resolve_template(config, store)
    except TemplateNotFoundError as exc:
        log.error("%s", exc)
        return RunSummary(outcome=RunOutcome.FAILED, message=str(exc))
    log.debug("Using template %s", template_path)

    importer = _Importer(config, store, template, parse, now, dry_run)
    results = [importer.run_file(path) for path in files]
    importer.finish()

    failed = [r for r in results if not r.ok]
    message = MSG_SUCCESS if not failed else f"BibTeX import finished with errors in {len(failed)} file(s)."
    return RunSummary(outcome=RunOutcome.DONE, message=message, files=results)
