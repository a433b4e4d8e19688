"""Command-line interface for jmap-webmail."""

import json
import sys
from collections.abc import Callable
from typing import Any

import click
import structlog

from jmap_webmail.config import Settings, get_settings, load_settings
from jmap_webmail.core import configure_logging
from jmap_webmail.exceptions import JmapWebmailError, describe_error
from jmap_webmail.jmap import JmapClient, discover
from jmap_webmail.models import sort_mailboxes

logger = structlog.get_logger(__name__)


def _format_date(iso_date: str) -> str:
    """Render ``2024-05-01T09:30:00Z`` as ``2024-05-01 09:30``."""
    date, sep, time = iso_date.partition("T")
    if not sep:
        return iso_date
    return f"{date} {time[:5]}"


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def credential_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --username/--password options, prompting when not given."""
    func = click.option(
        "--password",
        envvar="JMAP_WEBMAIL_PASSWORD",
        prompt=True,
        hide_input=True,
        help="JMAP password",
    )(func)
    func = click.option(
        "--username",
        envvar="JMAP_WEBMAIL_USERNAME",
        prompt=True,
        help="JMAP username",
    )(func)
    return func


def _settings(ctx: click.Context) -> Settings:
    config_path = ctx.obj.get("config_path")
    try:
        return load_settings(config_path) if config_path else get_settings()
    except Exception as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


def _login(ctx: click.Context, username: str, password: str) -> JmapClient:
    settings = _settings(ctx)
    try:
        _, client = discover(settings.jmap.well_known_url, username, password)
    except JmapWebmailError as e:
        logger.error("login_failed", error=e.message)
        click.echo(f"Login failed: {describe_error(e)}", err=True)
        sys.exit(1)
    return client


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
@click.option("--json-logs/--no-json-logs", default=False, help="JSON log format")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file (default: config.toml)",
)
@click.pass_context
def main(ctx: click.Context, debug: bool, json_logs: bool, config_path: str | None) -> None:
    """jmap-webmail - browse a JMAP mail account."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["json_logs"] = json_logs
    ctx.obj["config_path"] = config_path
    configure_logging(json_format=json_logs, debug=debug)


@main.command()
@credential_options
@click.pass_context
def check(ctx: click.Context, username: str, password: str) -> None:
    """Run session discovery and show the resolved account."""
    client = _login(ctx, username, password)
    click.echo(f"User:       {client.username}")
    click.echo(f"API URL:    {client.api_url}")
    click.echo(f"Account ID: {client.account_id}")


@main.command()
@credential_options
@click.pass_context
def mailboxes(ctx: click.Context, username: str, password: str) -> None:
    """List mailboxes, inbox first."""
    client = _login(ctx, username, password)
    try:
        boxes = client.get_mailboxes()
    except JmapWebmailError as e:
        click.echo(f"Failed to load mailboxes: {describe_error(e)}", err=True)
        sys.exit(1)

    for box in sort_mailboxes(boxes):
        unread = f" ({box.unread_emails})" if box.unread_emails > 0 else ""
        click.echo(f"{box.id}\t{box.name}{unread}")


@main.command()
@click.argument("mailbox_id")
@click.option("--limit", default=50, show_default=True, type=click.IntRange(1, 1000))
@click.option(
    "--offset",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Skip this many of the newest messages",
)
@credential_options
@click.pass_context
def emails(
    ctx: click.Context,
    mailbox_id: str,
    limit: int,
    offset: int,
    username: str,
    password: str,
) -> None:
    """List the newest messages in a mailbox."""
    client = _login(ctx, username, password)
    try:
        ids = client.query_emails(mailbox_id, limit, offset)
        messages = client.get_emails(ids)
    except JmapWebmailError as e:
        click.echo(f"Failed to load emails: {describe_error(e)}", err=True)
        sys.exit(1)

    if not messages:
        click.echo("No messages.")
        return

    for message in messages:
        marker = "*" if message.is_unread else " "
        sender = message.from_[0].short if message.from_ else "(unknown)"
        subject = message.subject or "(no subject)"
        click.echo(
            f"{marker} {message.id}\t{_format_date(message.received_at)}\t"
            f"{_truncate(sender, 30)}\t{_truncate(subject, 60)}"
        )

    # A full page means the server may hold more
    if len(ids) == limit:
        click.echo(f"More: --offset {offset + limit}")


@main.command()
@click.argument("email_id")
@click.option("--raw", is_flag=True, help="Print the JSON object returned by the server")
@credential_options
@click.pass_context
def show(ctx: click.Context, email_id: str, raw: bool, username: str, password: str) -> None:
    """Show one message."""
    client = _login(ctx, username, password)
    try:
        if raw:
            data = client.get_email_raw(email_id)
            if data is None:
                click.echo("Email not found", err=True)
                sys.exit(1)
            click.echo(json.dumps(data, indent=2))
            return
        message = client.get_email(email_id)
    except JmapWebmailError as e:
        click.echo(f"Failed to load email: {describe_error(e)}", err=True)
        sys.exit(1)

    if message is None:
        click.echo("Email not found", err=True)
        sys.exit(1)

    click.echo(f"From:    {', '.join(str(a) for a in message.from_)}")
    click.echo(f"To:      {', '.join(str(a) for a in message.to)}")
    if message.cc:
        click.echo(f"Cc:      {', '.join(str(a) for a in message.cc)}")
    click.echo(f"Date:    {_format_date(message.received_at)}")
    click.echo(f"Subject: {message.subject or '(no subject)'}")
    click.echo("")
    click.echo(message.body_text())


if __name__ == "__main__":
    main()
