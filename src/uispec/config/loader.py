"""User override configuration: discover, import, and normalize ``uispec.config.*``.

A config file maps library names to ``{rules?, usePreset?}``.  Malformed
parts are dropped field by field; a file that cannot be loaded at all is
logged and treated as "no override".
"""

from __future__ import annotations

import importlib
import importlib.util
import itertools
import logging
import sys
from typing import TYPE_CHECKING, Any

import yaml

from uispec.config.store import LibraryOverride
from uispec.render.props import UiRule, placeholder_template_error

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path
    from types import ModuleType

    from uispec.config.store import ResolvedConfig

logger = logging.getLogger(__name__)

CONFIG_BASENAMES: tuple[str, ...] = ("uispec.config", "uas.config")
CONFIG_EXTENSIONS: tuple[str, ...] = (".py", ".yaml", ".yml", ".toml")

_MODULE_COUNTER = itertools.count()


class ConfigLoadError(Exception):
    """Raised when a config file cannot be read, parsed, or imported."""


def define_config(config: dict[str, Any]) -> dict[str, Any]:
    """Identity helper for ``uispec.config.py`` files."""
    return config


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def config_candidates(root: Path) -> list[Path]:
    """Every path probed for a config file, in priority order."""
    return [root / f"{base}{ext}" for base in CONFIG_BASENAMES for ext in CONFIG_EXTENSIONS]


def find_config_file(root: Path) -> Path | None:
    """Return the first existing config file under *root*, or ``None``."""
    for candidate in config_candidates(root):
        if candidate.is_file():
            return candidate
    return None


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _import_object(spec: str) -> object:
    """Resolve ``"package.module:attr"`` to the named object."""
    module_name, _, attr_path = spec.partition(":")
    if not module_name or not attr_path:
        msg = f"expected 'module:attribute', got '{spec}'"
        raise ValueError(msg)
    obj: object = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def _normalize_transform(value: object, context: str) -> Callable[[dict[str, Any]], Any] | None:
    if isinstance(value, str):
        try:
            value = _import_object(value)
        except (ImportError, AttributeError, ValueError) as exc:
            logger.warning("%s: cannot import transform %r: %s", context, value, exc)
            return None
    if callable(value):
        return value
    logger.debug("%s: ignoring non-callable transform", context)
    return None


def normalize_rule(value: object, context: str = "rule") -> UiRule | None:
    """Build a :class:`UiRule` from a mapping, keeping only well-formed fields.

    Returns ``None`` when *value* is not a mapping at all.
    """
    if isinstance(value, UiRule):
        return value
    if not isinstance(value, dict):
        return None

    defaults = value.get("defaults")
    if not isinstance(defaults, dict):
        defaults = {}

    auto_placeholder: Any = False
    raw_placeholder = value.get("autoPlaceholder", value.get("auto_placeholder"))
    if isinstance(raw_placeholder, str):
        error = placeholder_template_error(raw_placeholder)
        if error is None:
            auto_placeholder = raw_placeholder
        else:
            logger.warning(
                "%s: ignoring autoPlaceholder %r: %s", context, raw_placeholder, error
            )
    elif isinstance(raw_placeholder, bool) or callable(raw_placeholder):
        auto_placeholder = raw_placeholder

    transform = None
    if "transform" in value:
        transform = _normalize_transform(value["transform"], context)

    return UiRule(defaults=defaults, auto_placeholder=auto_placeholder, transform=transform)


def normalize_rules(value: object, context: str = "rules") -> dict[str, UiRule] | None:
    """Normalize a component-name -> rule mapping; ``None`` when nothing survives."""
    if not isinstance(value, dict):
        return None
    rules: dict[str, UiRule] = {}
    for component_name, rule_value in value.items():
        rule = normalize_rule(rule_value, f"{context}.{component_name}")
        if rule is not None:
            rules[str(component_name)] = rule
    return rules or None


def normalize_library_config(value: object, context: str = "library") -> LibraryOverride | None:
    if isinstance(value, LibraryOverride):
        return value
    if not isinstance(value, dict):
        return None

    rules = normalize_rules(value.get("rules"), f"{context}.rules") if "rules" in value else None

    use_preset_raw = value.get("usePreset", value.get("use_preset"))
    use_preset = use_preset_raw if isinstance(use_preset_raw, bool) else None

    return LibraryOverride(rules=rules, use_preset=use_preset)


def normalize_config(value: object) -> ResolvedConfig | None:
    """Normalize a whole config export; ``None`` when no library entry survives."""
    if not isinstance(value, dict):
        return None
    config: dict[str, LibraryOverride] = {}
    for library, library_value in value.items():
        override = normalize_library_config(library_value, str(library))
        if override is not None:
            config[str(library)] = override
    return config or None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _module_export(module: ModuleType) -> object:
    """``default`` export, else ``config``, else the module's public namespace."""
    for attr in ("default", "config"):
        value = getattr(module, attr, None)
        if value is not None:
            return value
    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_") and isinstance(value, dict)
    }


def _import_python_config(path: Path) -> object:
    # Unique module name per load so edits are always re-executed.
    module_name = f"_uispec_user_config_{next(_MODULE_COUNTER)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"cannot import {path}"
        raise ConfigLoadError(msg)
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)
    return _module_export(module)


def _read_toml(path: Path) -> object:
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    return tomllib.loads(path.read_text(encoding="utf-8"))


def read_config_file(path: Path) -> object:
    """Return the raw export of a config file.

    Raises
    ------
    ConfigLoadError
        When the file cannot be read, parsed, or executed.
    """
    suffix = path.suffix.lower()
    try:
        if suffix == ".py":
            return _import_python_config(path)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        if suffix == ".toml":
            return _read_toml(path)
    except ConfigLoadError:
        raise
    except Exception as exc:
        msg = f"{path.name}: {exc}"
        raise ConfigLoadError(msg) from exc
    msg = f"{path.name}: unsupported config format '{suffix}'"
    raise ConfigLoadError(msg)


def load_user_config(path: Path | None) -> ResolvedConfig | None:
    """Load and normalize *path*; any failure is logged and yields ``None``."""
    if path is None:
        return None
    try:
        raw = read_config_file(path)
    except ConfigLoadError as exc:
        logger.warning("Failed to load config %s, using presets only: %s", path, exc)
        return None
    config = normalize_config(raw)
    if config is None:
        logger.warning("Config %s has no usable library entries", path)
    return config


def load_project_config(project_root: Path) -> ResolvedConfig | None:
    """Discover and load the config file of *project_root* (store loader hook)."""
    path = find_config_file(project_root)
    if path is None:
        logger.debug("No config file found in %s", project_root)
        return None
    logger.debug("Loading config %s", path)
    return load_user_config(path)
