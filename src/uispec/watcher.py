"""Config watcher: reload the user override file whenever it changes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

from uispec.config.loader import config_candidates, find_config_file, load_user_config
from uispec.config.store import default_store

if TYPE_CHECKING:
    import threading
    from collections.abc import Callable, Iterable

    from uispec.config.store import ConfigStore, ResolvedConfig

DEFAULT_DEBOUNCE_MS = 300


@dataclass(frozen=True)
class ConfigUpdateEvent:
    """Published after the store was updated from a config file."""

    file: str  # relative to the project root
    removed: bool = False


def _filter_relevant(
    changes: Iterable[tuple[Change, str]],
    project_root: Path,
) -> list[tuple[Change, Path]]:
    """Keep only changes to paths probed for a config file."""
    candidates = set(config_candidates(project_root))
    result: list[tuple[Change, Path]] = []
    for change_type, path_str in changes:
        p = Path(path_str)
        if p in candidates:
            result.append((change_type, p))
    return result


def _relative(path: Path, project_root: Path) -> str:
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return path.as_posix()


def _format_time() -> str:
    """Return current time as ``HH:MM:SS`` string."""
    return datetime.now(tz=timezone.utc).strftime("%H:%M:%S")


class ConfigWatcher:
    """Keeps a :class:`ConfigStore` in sync with the project's config file.

    The active file is always the highest-priority existing candidate, so
    deleting ``uispec.config.py`` falls back to ``uispec.config.yaml`` when
    both exist.  When none remains the store is cleared.
    """

    def __init__(
        self,
        project_root: Path,
        *,
        store: ConfigStore | None = None,
        callback: Callable[[ConfigUpdateEvent], None] | None = None,
        loader: Callable[[Path], ResolvedConfig | None] = load_user_config,
    ) -> None:
        self.project_root = project_root.resolve()
        self.store = store if store is not None else default_store
        self.callback = callback
        self._loader = loader
        self.config_path: Path | None = None

    def load_initial(self) -> Path | None:
        """Load whatever config file exists now; returns its path."""
        self.config_path = find_config_file(self.project_root)
        self.store.set(self._loader(self.config_path) if self.config_path else None)
        return self.config_path

    def handle_changes(self, changes: Iterable[tuple[Change, str]]) -> list[ConfigUpdateEvent]:
        """Apply one batch of filesystem changes; returns the events published."""
        relevant = _filter_relevant(changes, self.project_root)
        if not relevant:
            return []

        previous = self.config_path
        active = find_config_file(self.project_root)
        self.config_path = active

        if active is None:
            if previous is None:
                return []
            self.store.set(None)
            return [self._publish(ConfigUpdateEvent(_relative(previous, self.project_root), True))]

        touched = {path for change, path in relevant if change != Change.deleted}
        if active != previous or active in touched:
            self.store.set(self._loader(active))
            return [self._publish(ConfigUpdateEvent(_relative(active, self.project_root)))]
        return []

    def _publish(self, event: ConfigUpdateEvent) -> ConfigUpdateEvent:
        if self.callback is not None:
            self.callback(event)
        return event


def watch(
    project_root: Path,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    callback: Callable[[ConfigUpdateEvent], None] | None = None,
    *,
    store: ConfigStore | None = None,
    stop_event: threading.Event | None = None,
) -> None:
    """Watch the project root for config changes until interrupted.

    The config file may not exist yet; creating it later is picked up.
    """
    from rich.console import Console
    from watchfiles import watch as fs_watch

    console = Console()
    watcher = ConfigWatcher(project_root, store=store, callback=callback)

    initial = watcher.load_initial()
    if initial is None:
        console.print("[yellow]No config file yet, using presets only.[/yellow]")
    else:
        console.print(f"[bold blue]Config:[/bold blue] {_relative(initial, watcher.project_root)}")
    console.print(f"[dim]Debounce: {debounce_ms}ms  |  Press Ctrl+C to stop[/dim]")
    console.print()

    try:
        for batch in fs_watch(
            watcher.project_root,
            debounce=debounce_ms,
            recursive=False,
            stop_event=stop_event,
        ):
            for event in watcher.handle_changes(batch):
                timestamp = _format_time()
                if event.removed:
                    console.print(
                        f"[dim]{timestamp}[/dim] [yellow]{event.file} removed[/yellow], "
                        "using presets only"
                    )
                else:
                    console.print(f"[dim]{timestamp}[/dim] [green]reloaded[/green] {event.file}")
    except KeyboardInterrupt:
        console.print("\n[yellow]Watch stopped.[/yellow]")
