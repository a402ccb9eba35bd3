"""Paste-triggered auto-conversion."""

from unembed.watch.paste import AutoConverter
from unembed.watch.watcher import VaultWatcher

__all__ = ["AutoConverter", "VaultWatcher"]
