"""Filesystem-backed vault rooted at a local directory."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from unembed.extract.namer import normalize_path
from unembed.vault.base import VaultAdapter, VaultError

logger = logging.getLogger(__name__)


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)


class LocalVault:
    """VaultAdapter over a directory tree.

    Blocking filesystem calls run in a worker thread so the event loop stays free.
    Every path is resolved against the root and rejected if it escapes it.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def resolve(self, path: str) -> Path:
        target = (self.root / normalize_path(path)).resolve()
        if not target.is_relative_to(self.root):
            raise VaultError("resolve", path, ValueError("Path traversal detected"))
        return target

    def relative(self, path: str | Path) -> str:
        """Vault path for a filesystem path inside the root."""
        return Path(path).resolve().relative_to(self.root).as_posix()

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    async def ensure_dir(self, path: str) -> None:
        target = self.resolve(path)
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise VaultError("mkdir", path, exc) from exc

    async def write_binary(self, path: str, data: bytes) -> None:
        target = self.resolve(path)
        try:
            await asyncio.to_thread(target.write_bytes, data)
        except OSError as exc:
            raise VaultError("write", path, exc) from exc
        logger.debug("Wrote %d bytes to %s", len(data), path)

    async def read_text(self, path: str) -> str:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise VaultError("read", path, exc) from exc

    async def write_text(self, path: str, text: str) -> None:
        target = self.resolve(path)
        try:
            await asyncio.to_thread(target.write_text, text, encoding="utf-8")
        except OSError as exc:
            raise VaultError("write", path, exc) from exc

    async def list_markdown(self) -> list[str]:
        def _sync() -> list[str]:
            found = []
            for md in self.root.rglob("*.md"):
                rel = md.relative_to(self.root)
                if md.is_file() and not _is_hidden(rel):
                    found.append(rel.as_posix())
            return sorted(found)

        return await asyncio.to_thread(_sync)


class FileEditor:
    """A single note of a LocalVault treated as the open document.

    Editor access is synchronous, so reads and writes here block the event
    loop for the duration of one small file operation.
    """

    def __init__(self, vault: LocalVault, path: str) -> None:
        self.vault = vault
        self.path: str | None = normalize_path(path)

    def get_value(self) -> str:
        return self.vault.resolve(self.path or "").read_text(encoding="utf-8")

    def set_value(self, text: str) -> None:
        self.vault.resolve(self.path or "").write_text(text, encoding="utf-8")

