"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.candlestick_inline import generate_inline_candlestick_html
from adapters.site_renderer import SiteRenderer
from adapters.wordpress.errors import WordPressError
from adapters.wordpress.graphql_client import GraphQLClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.patterns import PatternType

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_PING_QUERY = "query Ping { generalSettings { title } }"


async def _check_cms(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with GraphQLClient(settings) as client:
            data = await client.execute(_PING_QUERY)
    except (WordPressError, httpx.HTTPError) as exc:
        return False, str(exc)
    title = (data.get("generalSettings") or {}).get("title")
    return True, f"Site: {title}" if title else "OK"


async def _check_jwt(settings: AppSettings) -> tuple[bool, str]:
    async with GraphQLClient(settings) as client:
        token = await client.get_jwt_token()
    if token:
        return True, "Token issued"
    return False, "Login mutation returned no token"


def _check_templates(settings: AppSettings) -> tuple[bool, str]:
    """Render a minimal home page and one inline candlestick."""

    try:
        html = SiteRenderer(site_url=settings.site_url).render_index([])
        svg = generate_inline_candlestick_html(PatternType.DOJI)
    except Exception as exc:
        return False, str(exc)
    if 'dir="rtl"' not in html or "<svg" not in svg:
        return False, "Unexpected template output"
    return True, "OK"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="CHARTSPOINT Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("GraphQL URL", "OK", settings.graphql_url)
    table.add_row("Site URL", "OK", settings.site_url)
    table.add_row("ACF fields", "ON" if settings.acf_enabled else "OFF", "CHARTSPOINT_ACF_ENABLED")
    table.add_row("Rank Math SEO", "ON" if settings.seo_enabled else "OFF", "CHARTSPOINT_SEO_ENABLED")

    # Connectivity
    ok_cms, detail_cms = asyncio.run(_check_cms(settings))
    table.add_row("CMS connectivity", "OK" if ok_cms else "FAIL", detail_cms)

    if settings.has_jwt_credentials():
        ok_jwt, detail_jwt = asyncio.run(_check_jwt(settings))
        table.add_row("JWT login", "OK" if ok_jwt else "FAIL", detail_jwt)
    else:
        table.add_row("JWT login", "OPTIONAL", "No credentials -> public queries only")

    ok_tpl, detail_tpl = _check_templates(settings)
    table.add_row("Templates", "OK" if ok_tpl else "FAIL", detail_tpl)

    _console.print(table)

    if not ok_cms:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `chartspoint doctor setup-cms` to store the GraphQL endpoint."
        )


@app.command(name="setup-cms")
def setup_cms() -> None:
    """Interactive CMS setup (stores config in the user config .env)."""

    settings = AppSettings()

    graphql_url = typer.prompt("WPGraphQL endpoint", default=settings.graphql_url, show_default=True).strip()
    site_url = typer.prompt("Public site URL", default=settings.site_url, show_default=True).strip()
    username = typer.prompt("JWT username (empty to skip)", default="", show_default=False).strip()
    password = ""
    if username:
        password = typer.prompt("JWT password", hide_input=True, confirmation_prompt=False).strip()

    if not graphql_url.startswith(("http://", "https://")):
        raise typer.BadParameter("graphql_url must be an http(s) URL")

    env_path = write_user_env_vars(
        {
            "CHARTSPOINT_GRAPHQL_URL": graphql_url,
            "CHARTSPOINT_SITE_URL": site_url,
            "CHARTSPOINT_JWT_USERNAME": username or None,
            "CHARTSPOINT_JWT_PASSWORD": password or None,
        },
        env_path=get_user_env_file(),
    )

    _console.print(f"[green]Saved CMS config to:[/green] {env_path}")
