"""Config domain - resolved user overrides, override file loading."""

from uispec.config.loader import (
    CONFIG_BASENAMES,
    CONFIG_EXTENSIONS,
    ConfigLoadError,
    define_config,
    find_config_file,
    load_project_config,
    load_user_config,
    normalize_config,
    normalize_rule,
)
from uispec.config.store import (
    ConfigStore,
    LibraryOverride,
    ResolvedConfig,
    default_store,
    get_library_user_config,
    get_resolved_config,
    set_resolved_config,
)

__all__ = [
    "CONFIG_BASENAMES",
    "CONFIG_EXTENSIONS",
    "ConfigLoadError",
    "ConfigStore",
    "LibraryOverride",
    "ResolvedConfig",
    "default_store",
    "define_config",
    "find_config_file",
    "get_library_user_config",
    "get_resolved_config",
    "load_project_config",
    "load_user_config",
    "normalize_config",
    "normalize_rule",
    "set_resolved_config",
]
