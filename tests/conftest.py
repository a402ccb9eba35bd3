"""Shared test fixtures for unembed."""

import base64

import pytest

from unembed.config.models import ConverterSettings, UnembedConfig
from unembed.extract.pipeline import ImageExtractor
from unembed.vault.base import VaultError

FIXED_TS = "2026-10-18T09-05-03-042Z"

HELLO_LINK = "![a](data:image/png;base64,aGVsbG8=)"


def embed(data: bytes, alt: str = "img", subtype: str = "png") -> str:
    """Markdown image link embedding `data` as a data URI."""
    return f"![{alt}](data:image/{subtype};base64,{base64.b64encode(data).decode()})"


class MemoryVault:
    """In-memory VaultAdapter.

    Like the host's adapter, `ensure_dir` raises FileExistsError for a directory
    that already exists. Paths listed in the `fail_*` sets raise VaultError.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files: dict[str, str] = dict(files or {})
        self.binaries: dict[str, bytes] = {}
        self.dirs: set[str] = set()
        self.text_writes: list[str] = []
        self.fail_read: set[str] = set()
        self.fail_write: set[str] = set()
        self.fail_mkdir: set[str] = set()

    async def ensure_dir(self, path: str) -> None:
        if path in self.fail_mkdir:
            raise VaultError("mkdir", path, PermissionError("read-only filesystem"))
        if path in self.dirs:
            raise FileExistsError(path)
        self.dirs.add(path)

    async def write_binary(self, path: str, data: bytes) -> None:
        if path in self.fail_write:
            raise VaultError("write", path, OSError("disk full"))
        self.binaries[path] = data

    async def read_text(self, path: str) -> str:
        if path in self.fail_read or path not in self.files:
            raise VaultError("read", path, FileNotFoundError(path))
        return self.files[path]

    async def write_text(self, path: str, text: str) -> None:
        self.files[path] = text
        self.text_writes.append(path)

    async def list_markdown(self) -> list[str]:
        return sorted(p for p in self.files if p.endswith(".md"))


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class MemoryEditor:
    def __init__(self, text: str, path: str | None = "note.md") -> None:
        self.path = path
        self.text = text
        self.set_calls = 0

    def get_value(self) -> str:
        return self.text

    def set_value(self, text: str) -> None:
        self.text = text
        self.set_calls += 1


@pytest.fixture
def settings():
    return ConverterSettings()


@pytest.fixture
def sample_config():
    return UnembedConfig()


@pytest.fixture
def vault():
    return MemoryVault()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def extractor(vault, notifier):
    return ImageExtractor(vault, notifier, clock=lambda: FIXED_TS)
