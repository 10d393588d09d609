"""Enhanced-component resolver: decide per component name whether a wrapped version exists.

The resolver merges the library preset, rules passed to the constructor and
the user override from the :class:`~uispec.config.store.ConfigStore`, then
memoizes one synthesized module per component name.  Any config change
published by the store empties the cache.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import types
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from uispec.config.store import default_store
from uispec.libraries import get_library_config
from uispec.naming import normalize, normalized_variants, to_pascal_case
from uispec.render.presets import get_preset
from uispec.render.props import EnhancedComponent, with_ui_rules

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from uispec.config.store import ConfigStore, ResolvedConfig
    from uispec.libraries import LibraryConfig
    from uispec.render.props import UiRule

logger = logging.getLogger(__name__)

ENHANCED_MODULE_PREFIX = "uispec.enhanced"

# Cache marker: the name was checked and no rule applies.
_NO_RULE = object()
_MISSING = object()

_RESOLVERS: weakref.WeakSet[UiEnhanceResolver] = weakref.WeakSet()


def _weak_listener(
    method: Callable[[ResolvedConfig | None], None],
) -> Callable[[ResolvedConfig | None], None]:
    """Wrap a bound method so the subscription does not own its instance."""
    ref = weakref.WeakMethod(method)

    def listener(config: ResolvedConfig | None) -> None:
        target = ref()
        if target is not None:
            target(config)

    return listener


@dataclass(frozen=True)
class ComponentReference:
    """Placeholder for the library component when no loader is configured."""

    package: str
    export: str


@dataclass(frozen=True)
class EnhancedComponentRef:
    """What a build tool imports in place of the library component.

    ``module`` is the synthesized module; its ``default`` attribute is the
    wrapped component.  ``side_effects`` is the style import the component
    needs, if its library defines one.
    """

    name: str
    from_: str
    component_name: str
    library: str
    module: types.ModuleType
    side_effects: str | None = None

    @property
    def component(self) -> EnhancedComponent:
        return self.module.default


class UiEnhanceResolver:
    """Resolve component names to enhanced components for one library.

    Parameters
    ----------
    library:
        Library name from :data:`~uispec.libraries.UI_LIBRARIES` or a custom
        :class:`~uispec.libraries.LibraryConfig`.
    rules:
        Rules keyed by component name, applied over the preset.
    use_preset:
        Start from the built-in preset.  A ``use_preset`` in the user
        override for this library takes precedence.
    store:
        Source of the user override; defaults to the process-wide store.
    component_loader:
        ``loader(library_config, component_name)`` returning the original
        component (or an awaitable of it).  Without one, the wrapped
        original is a :class:`ComponentReference`.
    """

    def __init__(
        self,
        library: str | LibraryConfig,
        rules: Mapping[str, UiRule] | None = None,
        use_preset: bool = True,
        *,
        store: ConfigStore | None = None,
        component_loader: Callable[[LibraryConfig, str], Any] | None = None,
    ) -> None:
        self.library = get_library_config(library)
        self.use_preset = use_preset
        self._rules: dict[str, UiRule] = dict(rules or {})
        self._store = store if store is not None else default_store
        self._component_loader = component_loader
        self._cache: dict[str, Any] = {}
        self._pending: dict[str, asyncio.Future[EnhancedComponentRef | None]] = {}
        # Runs once: on close(), or when an unclosed resolver is collected.
        self._unsubscribe = weakref.finalize(
            self, self._store.subscribe(_weak_listener(self._on_config_change))
        )
        _RESOLVERS.add(self)

    # -- cache ---------------------------------------------------------------

    def _on_config_change(self, _config: ResolvedConfig | None) -> None:
        logger.debug("Config changed, clearing %s enhancement cache", self.library.name)
        self.clear()

    def clear(self) -> None:
        """Forget every memoized decision.

        In-flight resolutions are detached too: they matched against the old
        rules, so later calls start fresh instead of joining them.
        """
        self._cache.clear()
        self._pending.clear()

    def close(self) -> None:
        """Stop following config changes."""
        self._unsubscribe()
        _RESOLVERS.discard(self)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    # -- rules ---------------------------------------------------------------

    def effective_rules(self) -> dict[str, UiRule]:
        """Preset, then constructor rules, then the user override; later wins."""
        override = self._store.get_library(self.library.name)
        use_preset = self.use_preset
        if override is not None and override.use_preset is not None:
            use_preset = override.use_preset

        rules: dict[str, UiRule] = dict(get_preset(self.library.name)) if use_preset else {}
        rules.update(self._rules)
        if override is not None and override.rules:
            rules.update(override.rules)
        return rules

    def _match(self, name: str) -> tuple[str, UiRule] | None:
        index: dict[str, tuple[str, UiRule]] = {}
        for key, rule in self.effective_rules().items():
            normalized = normalize(key)
            if normalized:
                index[normalized] = (key, rule)
        for variant in normalized_variants(name):
            found = index.get(variant)
            if found is not None:
                return found
        return None

    def lookup_rule(self, name: str) -> UiRule | None:
        """Effective rule for *name* under any spelling, without caching."""
        found = self._match(name)
        return None if found is None else found[1]

    # -- resolution ----------------------------------------------------------

    async def resolve(self, name: str) -> EnhancedComponentRef | None:
        """Return the enhanced reference for *name*, or ``None`` when no rule applies."""
        cached = self._cache.get(name, _MISSING)
        if cached is not _MISSING:
            return None if cached is _NO_RULE else cached

        pending = self._pending.get(name)
        if pending is None:
            pending = asyncio.ensure_future(self._resolve_uncached(name))
            self._pending[name] = pending
            pending.add_done_callback(lambda fut, key=name: self._forget_pending(key, fut))
        return await asyncio.shield(pending)

    def _forget_pending(self, name: str, future: asyncio.Future[Any]) -> None:
        if self._pending.get(name) is future:
            del self._pending[name]

    async def _resolve_uncached(self, name: str) -> EnhancedComponentRef | None:
        await self._store.ensure_loaded()
        version = self._store.version

        found = self._match(name)
        result = None if found is None else await self._build(name, found[1])

        if self._store.version == version:
            self._cache[name] = _NO_RULE if result is None else result
        else:
            logger.debug("Config changed while resolving %s, result not cached", name)
        return result

    async def _build(self, name: str, rule: UiRule) -> EnhancedComponentRef:
        component_name = to_pascal_case(name.strip())
        original = await self._load_original(component_name)

        module_name = f"{ENHANCED_MODULE_PREFIX}.{component_name}"
        module = types.ModuleType(module_name, f"{component_name} with UI rules applied.")
        module.default = with_ui_rules(component_name, original, rule)  # type: ignore[attr-defined]
        module.__all__ = ["default"]  # type: ignore[attr-defined]

        logger.debug("Enhanced %s from %s", component_name, self.library.package_name)
        return EnhancedComponentRef(
            name="default",
            from_=module_name,
            component_name=component_name,
            library=self.library.name,
            module=module,
            side_effects=self.library.style_import(component_name),
        )

    async def _load_original(self, component_name: str) -> Any:
        if self._component_loader is None:
            return ComponentReference(
                package=self.library.package_name,
                export=self.library.export_name(component_name),
            )
        original = self._component_loader(self.library, component_name)
        if inspect.isawaitable(original):
            original = await original
        return original


def clear_enhanced_cache() -> None:
    """Clear the cache of every live resolver (start of a build)."""
    for resolver in list(_RESOLVERS):
        resolver.clear()
