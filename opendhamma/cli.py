"""CLI entry point for Opendhamma."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from opendhamma.auth import AdminPolicy
from opendhamma.browser import (
    DefaultVaultMissing,
    ScripturePage,
    VaultBrowser,
    VaultNotFound,
    VaultPage,
)
from opendhamma.config import OpendhammaConfig, load_config
from opendhamma.config.loader import DEFAULT_CONFIG_TEMPLATE
from opendhamma.markdown import rewrite_links
from opendhamma.routes import vault_route
from opendhamma.vaults import RegistryError, VaultConfig, VaultRegistry
from opendhamma.vcs import RemoteError

app = typer.Typer(
    name="opendhamma",
    help="Browse dharma texts kept in GitHub vaults.",
)

config_app = typer.Typer(help="Manage Opendhamma configuration.")
app.add_typer(config_app, name="config")

admin_app = typer.Typer(help="Admin allow-list.")
app.add_typer(admin_app, name="admin")

# Global state
_config: OpendhammaConfig | None = None
_registry_path: str | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(config: OpendhammaConfig) -> None:
    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    logging.basicConfig(level=_LOG_LEVELS[config.log_level], handlers=[handler], force=True)


def _get_config() -> OpendhammaConfig:
    if _config is None:
        return load_config()
    return _config


def _get_browser() -> VaultBrowser:
    return VaultBrowser.from_config(_get_config(), registry_path=_registry_path)


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to opendhamma.yaml")
    ] = None,
    registry: Annotated[
        str | None,
        typer.Option("--registry", "-r", help="Path to vaults.yaml (overrides config)"),
    ] = None,
) -> None:
    """Global options."""
    global _config, _registry_path
    try:
        _config = load_config(config)
    except ValueError as e:
        raise _fail(str(e))
    _registry_path = registry
    _configure_logging(_config)


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------


def _display_vaults(vaults: list[VaultConfig]) -> None:
    table = Table(title=f"Vaults ({len(vaults)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Repository", style="green")
    table.add_column("Base path")
    table.add_column("Access")
    table.add_column("Topics", style="yellow")
    for v in vaults:
        name = f"{v.name} [bold green](default)[/bold green]" if v.default else v.name
        table.add_row(
            v.id,
            name,
            v.repo,
            v.base_path or "-",
            "read-only" if v.readonly else "writable (via PRs)",
            ", ".join(v.topics) if v.topics else "-",
        )
    rprint(table)


def _display_metadata(metadata: dict) -> None:
    if not metadata:
        return
    dumped = yaml.safe_dump(metadata, sort_keys=False, allow_unicode=True).rstrip()
    rprint(Panel(Syntax(dumped, "yaml"), title="Front matter", border_style="dim"))


def _display_page(page: VaultPage) -> None:
    if page.file is not None:
        rprint(f"[bold]{page.file.name}[/bold]  [dim]{page.resource_url}[/dim]")
        _display_metadata(page.file.metadata)
        if page.path.lower().endswith(".md"):
            rprint(Markdown(page.rendered or ""))
        else:
            rprint(escape(page.rendered or ""))
        return

    label = f"/{page.path}" if page.path else page.vault.name
    tree = Tree(f"[bold]Browsing: {label}[/bold]  [dim]{page.resource_url}[/dim]")
    if not page.is_root:
        tree.add(f"[blue]..[/blue]  {vault_route(page.vault.id, page.parent_path)}")
    for entry in page.entries:
        style = "yellow" if entry.is_dir else "green"
        suffix = "/" if entry.is_dir else ""
        tree.add(f"[{style}]{entry.name}{suffix}[/{style}]")
    rprint(tree)


def _display_scripture(page: ScripturePage) -> None:
    heading = f"{page.document} ({page.category.upper()}) - [{page.language.upper()}]"
    if page.title:
        heading = f"[bold]{escape(page.title)}[/bold]\n{heading}"
    rprint(Panel(heading, subtitle=page.file.web_url, border_style="blue"))
    _display_metadata(page.file.metadata)
    rprint(Markdown(page.rendered))
    if page.other_versions:
        versions = Tree("[bold]Other available versions[/bold]")
        for v in page.other_versions:
            versions.add(f"{v.name.removesuffix('.md')}  [dim]{v.web_url}[/dim]")
        rprint(versions)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def vaults() -> None:
    """List the vaults in the registry."""
    try:
        _display_vaults(_get_browser().list_vaults())
    except RegistryError as e:
        raise _fail(str(e))


@app.command()
def browse(
    vault_id: str = typer.Argument(..., help="Vault id from the registry"),
    path: str = typer.Argument("", help="Path inside the vault"),
) -> None:
    """Show a file or directory listing from a vault."""
    browser = _get_browser()
    try:
        page = asyncio.run(browser.browse(vault_id, path))
    except (VaultNotFound, RemoteError) as e:
        raise _fail(str(e))
    if page is None:
        raise _fail(f"Nothing found at {vault_route(vault_id, path)}")
    _display_page(page)


@app.command()
def sutta(
    category: str = typer.Argument(..., help="Collection, e.g. mn"),
    document: str = typer.Argument(..., help="Document id, e.g. mn10"),
) -> None:
    """Show a canonical text from the default vault."""
    browser = _get_browser()
    try:
        page = asyncio.run(browser.read_scripture(category, document))
    except (DefaultVaultMissing, RemoteError) as e:
        raise _fail(str(e))
    if page is None:
        raise _fail(f"Could not find {document} in {category}")
    _display_scripture(page)


@app.command()
def canon() -> None:
    """List canon collections in the default vault."""
    browser = _get_browser()
    try:
        categories = asyncio.run(browser.list_canon_categories())
    except (DefaultVaultMissing, RemoteError) as e:
        raise _fail(str(e))
    if not categories:
        rprint("[yellow]No canon collections found in the default vault.[/yellow]")
        return
    tree = Tree(f"[bold]Canon[/bold] ({len(categories)})")
    for entry in categories:
        tree.add(f"[cyan]{entry.name}[/cyan]  /tipitaka/{entry.name.lower()}")
    rprint(tree)


@app.command()
def links(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Markdown file"),
    vault_id: str = typer.Option(..., "--vault", "-v", help="Vault the file belongs to"),
    default: bool | None = typer.Option(
        None, "--default/--no-default", help="Treat the vault as the default vault"
    ),
) -> None:
    """Print a Markdown file with its [[wikilinks]] rewritten."""
    is_default = default
    if is_default is None:
        registry = VaultRegistry(_registry_path, config=_get_config().registry)
        is_default = registry.is_default(vault_id)
    typer.echo(rewrite_links(file.read_text(), vault_id, is_default), nl=False)


@admin_app.command("check")
def admin_check(email: str = typer.Argument(..., help="Email to check")) -> None:
    """Check an email against the admin allow-list."""
    policy = AdminPolicy.from_config(_get_config().auth)
    if policy.is_admin(email):
        rprint(f"[green]{email} is an admin[/green]")
    else:
        rprint(f"[red]{email} is not an admin[/red]")
        raise typer.Exit(1)


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Write a default opendhamma.yaml in the current directory."""
    dest = Path("opendhamma.yaml")
    if dest.exists() and not force:
        raise _fail(f"{dest} already exists (use --force to overwrite)")
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    dumped = yaml.safe_dump(_get_config().model_dump(), sort_keys=False)
    rprint(Syntax(dumped, "yaml"))


if __name__ == "__main__":
    app()
