"""Supported component libraries: tag prefix, package, export naming, style imports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from uispec.naming import to_kebab_case

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class LibraryConfig:
    """Metadata for one component library.

    ``export_prefix`` is the prefix of the package's named exports
    (``El`` for ``ElInput``); ``None`` means components are exported under
    their unprefixed name.  ``style_path`` derives the side-effect style
    import for a component, or is ``None`` when the library needs none.
    """

    name: str
    prefix: str
    package_name: str
    export_prefix: str | None = None
    style_path: Callable[[str], str] | None = None

    def strip_prefix(self, component_name: str) -> str:
        if component_name.startswith(self.prefix):
            return component_name[len(self.prefix) :]
        return component_name

    def export_name(self, component_name: str) -> str:
        """Name under which *component_name* is exported by the package."""
        base = self.strip_prefix(component_name)
        if self.export_prefix is None:
            return base
        return f"{self.export_prefix}{base}"

    def style_import(self, component_name: str) -> str | None:
        if self.style_path is None:
            return None
        return self.style_path(component_name)


def _style_under(template: str, prefix: str) -> Callable[[str], str]:
    """Style path deriver: kebab-case the unprefixed name into *template*."""

    def derive(component_name: str) -> str:
        base = component_name
        if base.startswith(prefix):
            base = base[len(prefix) :]
        return template.format(name=to_kebab_case(base))

    return derive


UI_LIBRARIES: dict[str, LibraryConfig] = {
    "vant": LibraryConfig(
        name="vant",
        prefix="Van",
        package_name="vant",
        style_path=_style_under("vant/es/{name}/style", "Van"),
    ),
    "element-plus": LibraryConfig(
        name="element-plus",
        prefix="El",
        package_name="element-plus",
        export_prefix="El",
        style_path=_style_under("element-plus/es/components/{name}/style/css", "El"),
    ),
    "naive-ui": LibraryConfig(
        name="naive-ui",
        prefix="N",
        package_name="naive-ui",
        export_prefix="N",
    ),
    "varlet": LibraryConfig(
        name="varlet",
        prefix="Var",
        package_name="@varlet/ui",
        style_path=_style_under("@varlet/ui/es/{name}/style", "Var"),
    ),
    "ant-design-vue": LibraryConfig(
        name="ant-design-vue",
        prefix="A",
        package_name="ant-design-vue",
        style_path=_style_under("ant-design-vue/es/{name}/style", "A"),
    ),
}


def get_library_config(library: str | LibraryConfig) -> LibraryConfig:
    """Resolve a library name or pass a custom config through.

    Raises
    ------
    KeyError
        When *library* names no known library.
    """
    if isinstance(library, LibraryConfig):
        return library
    try:
        return UI_LIBRARIES[library]
    except KeyError:
        msg = f"Unknown UI library '{library}', expected one of {sorted(UI_LIBRARIES)}"
        raise KeyError(msg) from None
