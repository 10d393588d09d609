"""Resolved user configuration: a versioned, replace-only reference cell.

Readers take a snapshot with :meth:`ConfigStore.get`; writers replace the
whole table with :meth:`ConfigStore.set`, which bumps the version and
notifies subscribers (resolvers drop their caches).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from uispec.render.props import UiRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryOverride:
    """User overrides for one library; ``None`` fields were not configured."""

    rules: Mapping[str, UiRule] | None = None
    use_preset: bool | None = None


ResolvedConfig = Mapping[str, LibraryOverride]


def freeze_config(
    config: ResolvedConfig | None,
) -> ResolvedConfig | None:
    """Copy *config* into a read-only mapping; empty or ``None`` stays ``None``."""
    if not config:
        return None
    return MappingProxyType(
        {
            library: LibraryOverride(
                rules=None if override.rules is None else MappingProxyType(dict(override.rules)),
                use_preset=override.use_preset,
            )
            for library, override in config.items()
        }
    )


class ConfigStore:
    """Holds the current :data:`ResolvedConfig` snapshot.

    Writes are serialized by a lock and replace the reference; a reader
    never sees a partially updated table.
    """

    def __init__(
        self,
        project_root: Path | None = None,
        *,
        loader: Callable[[Path], ResolvedConfig | None] | None = None,
    ) -> None:
        self._config: ResolvedConfig | None = None
        self._version = 0
        self._loaded = False
        self._lock = threading.Lock()
        self._load_lock: asyncio.Lock | None = None
        self._listeners: list[Callable[[ResolvedConfig | None], None]] = []
        self._loader = loader
        self.project_root = project_root or Path.cwd()

    @property
    def version(self) -> int:
        """Incremented on every :meth:`set`."""
        return self._version

    def get(self) -> ResolvedConfig | None:
        return self._config

    def get_library(self, library: str) -> LibraryOverride | None:
        config = self._config
        if config is None:
            return None
        return config.get(library)

    def set(self, config: ResolvedConfig | None) -> None:
        """Replace the whole configuration and notify subscribers."""
        frozen = freeze_config(config)
        with self._lock:
            self._config = frozen
            self._version += 1
            self._loaded = True
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(frozen)
            except Exception:
                logger.exception("Config listener %r failed", listener)

    def clear(self) -> None:
        self.set(None)

    async def ensure_loaded(self) -> None:
        """Run the loader once, off the event loop, unless a config was already set.

        Loaders report their own failures and return ``None``; the store then
        holds no override and resolution falls back to presets.
        """
        if self._loaded or self._loader is None:
            return
        if self._load_lock is None:
            self._load_lock = asyncio.Lock()
        async with self._load_lock:
            if self._loaded:
                return
            config = await asyncio.to_thread(self._loader, self.project_root)
            self.set(config)

    def subscribe(
        self, listener: Callable[[ResolvedConfig | None], None]
    ) -> Callable[[], None]:
        """Register *listener*; returns a function that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe


default_store = ConfigStore()


def get_resolved_config() -> ResolvedConfig | None:
    """Current process-wide configuration snapshot, or ``None`` when absent."""
    return default_store.get()


def set_resolved_config(config: ResolvedConfig | None) -> None:
    """Replace the process-wide configuration."""
    default_store.set(config)


def get_library_user_config(library: str) -> LibraryOverride | None:
    return default_store.get_library(library)
