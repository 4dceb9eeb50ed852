"""draft2jira CLI commands."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from draft2jira.errors import Draft2JiraError
from draft2jira.hosts.credentials import credential_store_for, get_credentials
from draft2jira.hosts.draft import FileDraft
from draft2jira.hosts.http import HttpxTransport
from draft2jira.hosts.notify import ConsoleNotifier
from draft2jira.pipeline import send_draft
from draft2jira.settings import get_settings, parse_project_url, resolve_config, save_profile, set_default_profile

app = typer.Typer(help="draft2jira: turn a markdown draft into a Jira issue", no_args_is_help=True)

ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Profile name from ~/.config/draft2jira/config.toml"),
]
DebugOpt = Annotated[bool, typer.Option("--debug", help="Log request and response details")]


def _configure_logging(debug: bool) -> None:
    logger = logging.getLogger("draft2jira")
    logger.handlers.clear()
    logger.addHandler(RichHandler(show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def _fail(exc: Draft2JiraError) -> typer.Exit:
    rprint(f"[red]{escape(str(exc))}[/red]")
    return typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("send")
def send(
    path: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, writable=True, help="Markdown draft to send"),
    ],
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Draft tag, sent as a Jira label (repeatable)"),
    ] = None,
    profile: ProfileOpt = None,
    debug: DebugOpt = False,
) -> None:
    """Create a Jira issue from a draft and prepend a link to it."""
    _configure_logging(debug)
    try:
        settings = get_settings(profile=profile)
        config = resolve_config(settings)
        draft = FileDraft(path, tags=tag or [])
        credentials = get_credentials(settings)
    except Draft2JiraError as exc:
        raise _fail(exc) from exc

    try:
        created = send_draft(config, credentials, draft, HttpxTransport(), ConsoleNotifier())
    except Draft2JiraError as exc:
        # the notifier has already reported it
        raise typer.Exit(1) from exc

    rprint(f"  {created.browse_url}")


@app.command("parse-url")
def parse_url(url: Annotated[str, typer.Argument(help="Jira project URL")]) -> None:
    """Show the site and project key a project URL resolves to."""
    location = parse_project_url(url)
    if location is None:
        rprint(f"[red]Not a Jira project URL: {escape(url)}[/red]")
        raise typer.Exit(1)
    rprint(f"site: {location.domain}")
    rprint(f"project key: {location.project_key}")


@app.command("config-show")
def config_show(profile: ProfileOpt = None) -> None:
    """Show resolved configuration (masks credentials)."""
    try:
        settings = get_settings(profile=profile)
        config = resolve_config(settings)
    except Draft2JiraError as exc:
        raise _fail(exc) from exc

    def mask(val: str | None) -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"...{val[-5:]}"

    table = Table(title="draft2jira Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("site", config.site)
    table.add_row("project_key", config.project_key)
    table.add_row("issue_type", config.issue_type)
    table.add_row("include_tags_as_labels", str(config.include_tags_as_labels))
    table.add_row("include_jira_labels", str(config.include_jira_labels))
    table.add_row("jira_labels", ", ".join(config.static_labels) or "[dim](none)[/dim]")
    table.add_row("credential_name", config.credential_name)
    table.add_row("jira_email", settings.jira_email or "[dim](not set)[/dim]")
    table.add_row(
        "jira_api_token",
        mask(settings.jira_api_token.get_secret_value() if settings.jira_api_token else None),
    )

    rprint(table)


@app.command("set-default")
def set_default(
    profile: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default profile in ~/.config/draft2jira/config.toml."""
    try:
        config_path = set_default_profile(profile)
    except Draft2JiraError as exc:
        raise _fail(exc) from exc
    rprint(f'[green]✓[/green] Default profile set to "{profile}" in {config_path}')


@app.command("forget-credentials")
def forget_credentials(profile: ProfileOpt = None) -> None:
    """Remove cached Jira credentials so the next send prompts again."""
    try:
        settings = get_settings(profile=profile)
    except Draft2JiraError as exc:
        raise _fail(exc) from exc

    store = credential_store_for(settings)
    if store.forget():
        rprint(f"[green]✓[/green] Forgot credential '{store.name}'")
    else:
        rprint(f"[dim]No cached credential '{store.name}'[/dim]")


@app.command("init")
def init_cmd() -> None:
    """Interactive first-time setup wizard."""
    rprint("[bold]draft2jira Setup Wizard[/bold]")
    rprint("")

    # Step 1: profile name
    profile_name = typer.prompt("Profile name (e.g. work, personal)").strip()
    if not profile_name:
        rprint("[red]Profile name cannot be empty.[/red]")
        raise typer.Exit(1)

    profile_config: dict = {}

    # Step 2: project, from a URL or as two discrete values
    url = typer.prompt(
        "Jira project URL (e.g. https://acme.atlassian.net/jira/software/projects/PROJ, or leave blank)",
        default="",
    ).strip()
    location = parse_project_url(url) if url else None
    if location:
        profile_config["jira_project_url"] = url
        rprint(f"[green]✓[/green] Site {location.domain}, project {location.project_key}")
    else:
        if url:
            rprint("[yellow]Could not read that URL.[/yellow] Enter the site and project key instead.")
        site = typer.prompt("Jira site (e.g. acme.atlassian.net)").strip()
        key = typer.prompt("Project key (e.g. PROJ)").strip()
        if not site or not key:
            rprint("[red]Site and project key are required.[/red]")
            raise typer.Exit(1)
        profile_config["jira_site_url"] = site
        profile_config["jira_project_key"] = key

    # Step 3: issue fields
    profile_config["jira_issue_type"] = typer.prompt("Issue type", default="Task").strip()
    profile_config["include_tags_as_labels"] = typer.confirm("Send draft tags as Jira labels?", default=True)
    labels = typer.prompt("Extra labels, comma-separated (or leave blank)", default="sent-from-drafts").strip()
    if labels:
        profile_config["jira_labels"] = labels
    else:
        profile_config["include_jira_labels"] = False

    # Step 4: set as default?
    set_as_default = typer.confirm(f"Set '{profile_name}' as default profile?", default=True)

    # Step 5: write config
    config_path = save_profile(profile_name, profile_config, make_default=set_as_default)
    rprint(f"[green]✓[/green] Profile '{profile_name}' written to {config_path}")

    # Step 6: credentials are cached on first send unless stored now
    if typer.confirm("Store Jira email and API token now?", default=False):
        rprint("Create an API token at: https://id.atlassian.com/manage-profile/security/api-tokens")
        try:
            credential_store_for(get_settings(profile=profile_name)).authorize()
        except Draft2JiraError as exc:
            raise _fail(exc) from exc
        rprint("[green]✓[/green] Credentials cached.")
