"""EVENTSITE events CLI: read-only views over the event repository.

Results are printed to **stdout** as JSON; errors become ``ClickException``s
(exit code 1) with the message on **stderr**.

Examples
    $ eventsite events show --user auth0|123
    $ eventsite events show --subdomain anna-and-ben
    $ eventsite events history --user auth0|123
    $ eventsite events check-subdomain anna-and-ben --user auth0|123
"""

from __future__ import annotations

import json
from typing import Any

import click
import click_extra as clickx

from eventsite import config
from eventsite.adapters.db.dialects import UnsupportedDialect
from eventsite.bootstrap import AppContainer, bootstrap
from eventsite.domain.errors import EventError
from eventsite.interfaces.errors import StoreError

from .db import MISSING_DB_URL_MSG, UNSUPPORTED_DIALECT_MSG


def _container(ctx: click.Context) -> AppContainer:
    """Bootstrap once per invocation and dispose of the engine on exit."""
    if (container := ctx.meta.get("eventsite.container")) is None:
        try:
            container = bootstrap()
        except config.DatabaseUrlNotSetError as e:
            raise click.ClickException(MISSING_DB_URL_MSG) from e
        except config.InvalidSettingError as e:
            raise click.ClickException(str(e)) from e
        except UnsupportedDialect as e:
            raise click.ClickException(UNSUPPORTED_DIALECT_MSG) from e
        ctx.meta["eventsite.container"] = container
        ctx.call_on_close(container.engine.dispose)
    return container


def _emit(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.group(cls=clickx.ExtraGroup)
def events() -> None:
    """Inspect events."""


@events.command()
@click.option("--user", "user_id", help="Owner of the event.")
@click.option("--subdomain", help="Subdomain an ACTIVE event is served under.")
@click.pass_context
def show(ctx: click.Context, user_id: str | None, subdomain: str | None) -> None:
    """Show one event, looked up by owner or by subdomain."""
    if (user_id is None) == (subdomain is None):
        raise click.UsageError("Pass exactly one of --user or --subdomain.")
    repository = _container(ctx).repository
    try:
        if user_id is not None:
            event = repository.get_event_by_user(user_id)
        else:
            event = repository.get_event_by_subdomain(subdomain or "")
    except (EventError, StoreError) as e:
        raise click.ClickException(str(e)) from e
    _emit(event.to_json())


@events.command()
@click.option("--user", "user_id", required=True, help="Owner of the event.")
@click.pass_context
def history(ctx: click.Context, user_id: str) -> None:
    """Show the audit trail of a user's event, oldest first."""
    try:
        entries = _container(ctx).repository.get_event_history(user_id)
    except (EventError, StoreError) as e:
        raise click.ClickException(str(e)) from e
    _emit([entry.to_json() for entry in entries])


@events.command("check-subdomain")
@click.argument("subdomain")
@click.option("--user", "user_id", required=True, help="User who wants the subdomain.")
@click.pass_context
def check_subdomain(ctx: click.Context, subdomain: str, user_id: str) -> None:
    """Tell whether USER could use SUBDOMAIN for their event."""
    try:
        available = _container(ctx).repository.check_subdomain_available(
            subdomain, user_id
        )
    except StoreError as e:
        raise click.ClickException(str(e)) from e
    _emit({"subdomain": subdomain, "user_id": user_id, "available": available})
