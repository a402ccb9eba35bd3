"""Debounced conversion after a paste into the open document."""

from __future__ import annotations

import asyncio
import logging

from unembed.config.models import ConverterSettings
from unembed.extract.models import ConversionReport
from unembed.extract.pipeline import ImageExtractor
from unembed.extract.scanner import contains_embedded_image
from unembed.vault.base import Editor

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.1


class AutoConverter:
    """Schedules one conversion per paste event, after a short delay.

    The delay lets the paste land in the document before it is read. Scheduled
    runs are never cancelled; every paste event gets exactly one run.
    """

    def __init__(
        self,
        extractor: ImageExtractor,
        settings: ConverterSettings,
        delay: float = DEFAULT_DELAY,
    ) -> None:
        self.extractor = extractor
        self.settings = settings
        self.delay = delay
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def on_paste(self, editor: Editor) -> asyncio.Task | None:
        """Handle a paste notification. Must be called from the event loop thread."""
        if not self.settings.auto_convert:
            return None
        task = asyncio.get_running_loop().create_task(self._run_later(editor))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled run to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _run_later(self, editor: Editor) -> ConversionReport | None:
        await asyncio.sleep(self.delay)
        try:
            content = editor.get_value()
        except Exception as exc:
            logger.error("Cannot read %s after paste: %s", editor.path, exc)
            return None
        if not contains_embedded_image(content):
            return None
        logger.info("Auto-converting embedded images in %s", editor.path)
        return await self.extractor.convert_current(editor, self.settings)
