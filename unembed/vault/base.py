"""Host capabilities consumed by the extract pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class VaultError(Exception):
    """A vault operation failed; wraps the underlying error."""

    def __init__(self, operation: str, path: str, cause: Exception) -> None:
        self.operation = operation
        self.path = path
        super().__init__(f"{operation} {path!r} failed: {cause}")
        self.__cause__ = cause


@runtime_checkable
class VaultAdapter(Protocol):
    """Vault-relative file access. Paths are POSIX strings relative to the vault root."""

    async def ensure_dir(self, path: str) -> None: ...

    async def write_binary(self, path: str, data: bytes) -> None: ...

    async def read_text(self, path: str) -> str: ...

    async def write_text(self, path: str, text: str) -> None: ...

    async def list_markdown(self) -> list[str]: ...


@runtime_checkable
class Editor(Protocol):
    """The currently open document."""

    path: str | None

    def get_value(self) -> str: ...

    def set_value(self, text: str) -> None: ...


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget user notices."""

    def notify(self, message: str) -> None: ...
