"""Vault, editor and notifier collaborators."""

from unembed.vault.base import Editor, Notifier, VaultAdapter, VaultError
from unembed.vault.local import FileEditor, LocalVault
from unembed.vault.notify import ConsoleNotifier, LogNotifier

__all__ = [
    "ConsoleNotifier",
    "Editor",
    "FileEditor",
    "LocalVault",
    "LogNotifier",
    "Notifier",
    "VaultAdapter",
    "VaultError",
]
