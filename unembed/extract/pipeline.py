"""ImageExtractor — scan, decode, write and relink embedded images."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from unembed.config.models import ConverterSettings
from unembed.extract.decoder import decode
from unembed.extract.models import ConversionReport, DocumentError, MatchError
from unembed.extract.namer import (
    document_directory,
    locate,
    make_timestamp,
    name_for,
    output_directory,
)
from unembed.extract.rewriter import rewrite
from unembed.extract.scanner import contains_embedded_image, scan
from unembed.vault.base import Editor, Notifier, VaultAdapter
from unembed.vault.notify import LogNotifier

logger = logging.getLogger(__name__)

# Bulk runs emit a progress notice after every N documents.
PROGRESS_EVERY = 10


def _plural(count: int) -> str:
    return f"{count} base64 image{'' if count == 1 else 's'}"


class ImageExtractor:
    """Moves embedded base64 images out of notes and into files.

    Every filesystem effect goes through the injected VaultAdapter; settings are
    passed per call so a single extractor can serve differently configured runs.
    Work is strictly sequential: one document, and within it one image, at a time.
    """

    def __init__(
        self,
        vault: VaultAdapter,
        notifier: Notifier | None = None,
        clock: Callable[[], str] = make_timestamp,
    ) -> None:
        self.vault = vault
        self.notifier = notifier or LogNotifier()
        self._clock = clock

    # -- Public API ----------------------------------------------------------

    async def convert_document(
        self,
        text: str,
        document_dir: str,
        settings: ConverterSettings,
        *,
        document: str | None = None,
    ) -> tuple[str, ConversionReport]:
        """Extract every embedded image in `text`.

        Returns the rewritten text and a report. Images that fail to decode or
        write are recorded in `report.errors` and stay embedded. A failure to
        create the output directory propagates.
        """
        matches = scan(text)
        report = ConversionReport(matched=len(matches))
        if not matches:
            return text, report

        await self._ensure_dir(output_directory(document_dir, settings.output_folder))

        new_text = text
        for index, match in enumerate(matches, start=1):
            try:
                filename = name_for(index, match.subtype, self._clock(), settings.filename_format)
                location = locate(document_dir, settings.output_folder, filename)
                data = decode(match.payload)
                await self.vault.write_binary(location.absolute_path, data)
            except Exception as exc:
                report.errors.append(MatchError(index=index, message=str(exc), document=document))
                logger.error("Error converting image %d in %s: %s", index, document or "document", exc)
                continue

            new_text = rewrite(new_text, match, location.relative_path)
            report.converted += 1
            logger.debug("Extracted image %d to %s", index, location.absolute_path)

        return new_text, report

    async def convert_current(self, editor: Editor | None, settings: ConverterSettings) -> ConversionReport:
        """Convert the open document and replace its text in one update."""
        if editor is None or editor.path is None:
            self.notifier.notify("No file is currently open")
            return ConversionReport()

        path = editor.path
        try:
            new_text, report = await self.convert_document(
                editor.get_value(), document_directory(path), settings, document=path
            )
        except Exception as exc:
            return self._document_failed(path, exc, ConversionReport())

        report.documents_total = 1
        if report.matched == 0:
            self.notifier.notify("No base64 images found in the current file")
            return report

        for err in report.errors:
            self.notifier.notify(f"Error converting image {err.index}: {err.message}")

        try:
            editor.set_value(new_text)
        except Exception as exc:
            # extracted files stay on disk; the note keeps its embedded images
            return self._document_failed(path, exc, report)

        if report.converted:
            report.documents_modified.append(path)
        self.notifier.notify(f"Converted {_plural(report.converted)} to PNG")
        return report

    async def convert_all(
        self,
        settings: ConverterSettings,
        documents: Sequence[str] | None = None,
    ) -> ConversionReport:
        """Convert every note in the working set, one after another.

        `documents` defaults to every markdown note in the vault. A note that
        cannot be read, or whose output directory cannot be created, is
        recorded in `report.document_errors` and the run moves on.
        """
        start = time.monotonic()
        paths = list(documents) if documents is not None else await self.vault.list_markdown()
        total = len(paths)
        report = ConversionReport(documents_total=total)
        self.notifier.notify(f"Processing {total} files...")

        for processed, path in enumerate(paths, start=1):
            try:
                await self._convert_stored(path, settings, report)
            except Exception as exc:
                report.document_errors.append(DocumentError(document=path, error=str(exc)))
                logger.exception("Error processing file %s", path)
                self.notifier.notify(f"Error processing file {path}: {exc}")

            if processed % PROGRESS_EVERY == 0:
                self.notifier.notify(f"Processed {processed}/{total} files...")

        report.duration = time.monotonic() - start
        self.notifier.notify(
            f"Completed! Converted {_plural(report.converted)} across {total} files."
        )
        logger.info(
            "Converted %d/%d images in %d of %d files (%d errors)",
            report.converted,
            report.matched,
            len(report.documents_modified),
            total,
            len(report.errors) + len(report.document_errors),
        )
        return report

    async def find_embedded(self, documents: Sequence[str] | None = None) -> dict[str, int]:
        """Map each note containing embedded images to its match count. Writes nothing.

        Notes that cannot be read are logged and left out.
        """
        paths = list(documents) if documents is not None else await self.vault.list_markdown()
        found: dict[str, int] = {}
        for path in paths:
            try:
                text = await self.vault.read_text(path)
            except Exception as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue
            if contains_embedded_image(text):
                found[path] = len(scan(text))
        return found

    # -- Internals -----------------------------------------------------------

    async def _convert_stored(self, path: str, settings: ConverterSettings, report: ConversionReport) -> None:
        text = await self.vault.read_text(path)
        if not contains_embedded_image(text):
            return

        new_text, doc_report = await self.convert_document(
            text, document_directory(path), settings, document=path
        )
        if doc_report.converted > 0:
            await self.vault.write_text(path, new_text)
            report.documents_modified.append(path)
            logger.info("Updated %s (%d/%d images)", path, doc_report.converted, doc_report.matched)
        report.merge(doc_report)

    def _document_failed(self, path: str, exc: Exception, report: ConversionReport) -> ConversionReport:
        logger.exception("Error processing file %s", path)
        self.notifier.notify(f"Error processing file {path}: {exc}")
        report.documents_total = 1
        report.document_errors.append(DocumentError(document=path, error=str(exc)))
        return report

    async def _ensure_dir(self, path: str) -> None:
        try:
            await self.vault.ensure_dir(path)
        except FileExistsError:
            pass
