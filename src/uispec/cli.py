"""uispec CLI entry point."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from uispec import __version__
from uispec.libraries import UI_LIBRARIES


@click.group()
@click.version_option(version=__version__, prog_name="uispec")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """uispec - component attribute lint + UI rule presets."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


_PROJECT_OPTION = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------


@main.command()
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(path_type=Path),
)
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Rules file (default: <project>/.uispec/rules.yml, else recommended rules).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if violations found.",
)
@_PROJECT_OPTION
def lint(
    *,
    paths: tuple[Path, ...],
    rules_path: Path | None,
    fmt: str | None,
    strict: bool,
    project: Path | None,
) -> None:
    """Check component tags in .vue/.html templates for required attributes.

    PATHS default to the project root.
    Exit codes: 0 = clean or violations without --strict,
    1 = violations with --strict, 2 = configuration error.
    """
    from uispec.lint.linter import LintError
    from uispec.lint.linter import format_json as _format_json
    from uispec.lint.linter import format_porcelain as _format_porcelain
    from uispec.lint.linter import format_rich as _format_rich
    from uispec.lint.linter import lint as run_lint

    project_root = project or Path.cwd()

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        result = run_lint(
            paths or (project_root,), project_root=project_root, rules_path=rules_path
        )
    except LintError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    formatters = {
        "rich": _format_rich,
        "json": _format_json,
        "porcelain": _format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)

    if strict and result.violations:
        sys.exit(1)


# ---------------------------------------------------------------------------
# presets
# ---------------------------------------------------------------------------


def _describe_placeholder(policy: object) -> object:
    if callable(policy):
        return getattr(policy, "__name__", "<callable>")
    return policy


@main.command()
@click.argument("library", required=False, type=click.Choice(sorted(UI_LIBRARIES)))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def presets(*, library: str | None, as_json: bool) -> None:
    """Show the built-in UI rule presets."""
    from uispec.render.presets import PRESETS

    names = [library] if library else list(PRESETS)
    data = {
        name: {
            component: {
                "defaults": dict(rule.defaults),
                "auto_placeholder": _describe_placeholder(rule.auto_placeholder),
            }
            for component, rule in PRESETS[name].items()
        }
        for name in names
    }

    if as_json:
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
        return

    for name, components in data.items():
        click.echo(f"{name} ({UI_LIBRARIES[name].package_name})")
        for component, info in components.items():
            defaults = ", ".join(f"{k}={v!r}" for k, v in info["defaults"].items())
            line = f"  {component}: {defaults}"
            if info["auto_placeholder"]:
                line += f"  [placeholder: {info['auto_placeholder']}]"
            click.echo(line)
        click.echo("")


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


@main.command()
@click.argument("name")
@click.option(
    "--library",
    "-l",
    required=True,
    type=click.Choice(sorted(UI_LIBRARIES)),
    help="Component library.",
)
@click.option("--no-preset", is_flag=True, default=False, help="Ignore the built-in preset.")
@click.option("--label", default=None, help="Label used to preview the resolved props.")
@_PROJECT_OPTION
def resolve(
    *,
    name: str,
    library: str,
    no_preset: bool,
    label: str | None,
    project: Path | None,
) -> None:
    """Show how component NAME is enhanced, honoring the project's config file.

    Exits 1 when no rule applies to NAME.
    """
    from uispec.config.loader import load_project_config
    from uispec.config.store import ConfigStore
    from uispec.resolver import UiEnhanceResolver

    store = ConfigStore(project or Path.cwd(), loader=load_project_config)
    resolver = UiEnhanceResolver(library, use_preset=not no_preset, store=store)

    ref = asyncio.run(resolver.resolve(name))
    if ref is None:
        click.echo(f"No UI rule for <{name}> in {library}.", err=True)
        sys.exit(1)

    click.echo(f"{ref.component_name} -> {ref.from_} ({ref.name})")
    if ref.side_effects:
        click.echo(f"  style: {ref.side_effects}")
    explicit = {"label": label} if label else None
    props = ref.component.props_for(props=explicit)
    click.echo(f"  props: {json.dumps(props, ensure_ascii=False, default=str)}")


# ---------------------------------------------------------------------------
# watch
# ---------------------------------------------------------------------------


@main.command("watch")
@click.option("--debounce", default=300, type=int, help="Debounce delay in ms.")
@_PROJECT_OPTION
def watch_cmd(*, debounce: int, project: Path | None) -> None:
    """Watch the project's uispec.config.* file and reload it on change."""
    from uispec.watcher import watch

    watch(project or Path.cwd(), debounce_ms=debounce)
