# custom_components/olisto/olisto_control/olistoctl.py
"""Olisto command line entrypoint.

Standalone: does not depend on Home Assistant. Every invocation logs in with
the given credentials into an in-memory store, runs one operation and exits.

    olistoctl --email you@example.com list-triggs kitchen
    OLISTO_EMAIL=... OLISTO_PASSWORD=... olistoctl press-button <id>
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import aiohttp
import typer
from rich import print
from rich.table import Table
from typing_extensions import Annotated

from .const import DEFAULT_TIMEOUT
from .exception import OlistoError
from .session import SessionClient
from .store import MemoryCredentialStore

app = typer.Typer(help="Olisto cloud control")


def _open_http() -> aiohttp.ClientSession:
    return aiohttp.ClientSession()


# ────────────────────────────────────────────────────────────────
# Global options
# ────────────────────────────────────────────────────────────────
@app.callback()
def _global_options(
    ctx: typer.Context,
    email: Annotated[
        str,
        typer.Option("--email", "-e", envvar="OLISTO_EMAIL", prompt=True, help="Olisto account e-mail."),
    ],
    password: Annotated[
        str,
        typer.Option(
            "--password",
            "-p",
            envvar="OLISTO_PASSWORD",
            prompt=True,
            hide_input=True,
            help="Olisto account password.",
        ),
    ],
    timeout: Annotated[
        float,
        typer.Option("--timeout", min=1.0, max=60.0, help="Per-request timeout in seconds."),
    ] = DEFAULT_TIMEOUT,
    debug: Annotated[
        bool,
        typer.Option("--debug/--no-debug", help="Enable verbose debug logging"),
    ] = False,
) -> None:
    ctx.obj = {"email": email, "password": password, "timeout": timeout}

    if debug:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_level=True)],
        )


# ────────────────────────────────────────────────────────────────
# Shared runner
# ────────────────────────────────────────────────────────────────
def _run_session_func(ctx: typer.Context, fn: Callable[[SessionClient], Awaitable[Any]]) -> Any:
    """Log in, run ``fn`` against the session client, return its result."""
    opts = ctx.obj or {}

    async def _async_func():
        async with _open_http() as http:
            client = SessionClient.create(
                http, MemoryCredentialStore(), timeout=opts.get("timeout", DEFAULT_TIMEOUT)
            )
            if not await client.login(opts["email"], opts["password"]):
                print("[red]Login failed. Check the provided credentials and try again.[/red]")
                raise typer.Exit(code=1)
            return await fn(client)

    try:
        return asyncio.run(_async_func())
    except OlistoError as err:
        print(f"[red]{err}[/red]")
        raise typer.Exit(code=1)


def _report(ok: bool, what: str) -> None:
    if ok:
        print(f"[green]{what}: ok[/green]")
    else:
        print(f"[red]{what}: Olisto reported failure[/red]")
        raise typer.Exit(code=1)


# ────────────────────────────────────────────────────────────────
# Commands
# ────────────────────────────────────────────────────────────────
@app.command(name="check-login")
def check_login(ctx: typer.Context) -> None:
    """Log in, then ask Olisto whether it accepts the new session token."""

    async def _check(client: SessionClient) -> bool:
        return await client.provider.check_login(client.gate.get_token())

    _report(_run_session_func(ctx, _check), "session check")


@app.command(name="list-triggs")
def list_triggs(ctx: typer.Context, query: Annotated[Optional[str], typer.Argument()] = None) -> None:
    """List triggs, optionally filtered by name."""
    triggs = _run_session_func(ctx, lambda client: client.list_automations(query or ""))
    table = Table("Name", "Id", "Category", "Enabled")
    for trigg in triggs:
        table.add_row(trigg.name, trigg.id, trigg.category, "yes" if trigg.enabled else "no")
    print(table)


@app.command(name="list-buttons")
def list_buttons(ctx: typer.Context, query: Annotated[Optional[str], typer.Argument()] = None) -> None:
    """List the virtual buttons, optionally filtered by name."""
    buttons = _run_session_func(ctx, lambda client: client.list_buttons(query or ""))
    table = Table("Name", "Id")
    for button in buttons:
        table.add_row(button.name, button.id)
    print(table)


@app.command(name="enable-trigg")
def enable_trigg(ctx: typer.Context, trigg_id: str) -> None:
    """Enable a trigg."""
    _report(_run_session_func(ctx, lambda client: client.set_automation(trigg_id, True)), "enable")


@app.command(name="disable-trigg")
def disable_trigg(ctx: typer.Context, trigg_id: str) -> None:
    """Disable a trigg."""
    _report(_run_session_func(ctx, lambda client: client.set_automation(trigg_id, False)), "disable")


@app.command(name="trigg-status")
def trigg_status(ctx: typer.Context, trigg_id: str) -> None:
    """Show whether a trigg is enabled."""
    enabled = _run_session_func(ctx, lambda client: client.check_automation_enabled(trigg_id))
    print(f"{trigg_id}: {'[green]enabled[/green]' if enabled else '[yellow]disabled[/yellow]'}")


@app.command(name="press-button")
def press_button(ctx: typer.Context, button_id: str) -> None:
    """Push a virtual button."""
    _report(_run_session_func(ctx, lambda client: client.press_button(button_id)), "press")


if __name__ == "__main__":
    app()
