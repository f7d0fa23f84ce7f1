# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for previewing and sending transmissions.

Usage:
    sparkpost format payload.json
    sparkpost send payload.json --retries 2

Options not given on the command line are read from the environment
(``SPARKPOST_API_KEY``, ``SPARKPOST_HOST``, ...) or from ``--config``.

Example:
    $ sparkpost format welcome.json
    {
      "recipients": [{"address": {"name": "Jane", "email": "jane@example.com"}}],
      ...
    }
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from sparkpost_client import __version__
from sparkpost_client.client import SparkPost
from sparkpost_client.config import load_options
from sparkpost_client.exceptions import ClientError, SparkPostError
from sparkpost_client.formatting import format_payload

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print a formatted error message to stderr.

    Args:
        message: Error message text to display.
    """
    err_console.print(f"[red]Error:[/red] {message}")


def print_json(data: Any) -> None:
    """Print data as syntax-highlighted JSON."""
    console.print_json(json.dumps(data, indent=2, default=str))


def read_payload(path: str) -> dict[str, Any]:
    """Load a transmission payload from a JSON file.

    Raises:
        click.ClickException: If the file is not a JSON object.
    """
    try:
        payload = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise click.ClickException(f"{path} must contain a JSON object")
    return payload


@click.group()
@click.version_option(__version__, package_name="sparkpost-client")
def main() -> None:
    """Preview and send SparkPost transmissions."""


@main.command("format")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
def format_command(payload_file: str) -> None:
    """Print the normalized wire payload without sending it."""
    payload = read_payload(payload_file)
    try:
        formatted = format_payload(payload)
    except SparkPostError as exc:
        print_error(str(exc))
        sys.exit(1)
    print_json(formatted)


@main.command("send")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", default=None, help="API key (default: $SPARKPOST_API_KEY).")
@click.option("--host", default=None, help="API host (default: api.sparkpost.com).")
@click.option("--retries", type=int, default=None, help="Retries on 5xx responses.")
@click.option("--debug", is_flag=True, help="Show the request that was sent.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="INI file with a [sparkpost] section.")
def send_command(
    payload_file: str,
    key: str | None,
    host: str | None,
    retries: int | None,
    debug: bool,
    config_path: str | None,
) -> None:
    """Post PAYLOAD_FILE to the transmissions endpoint."""
    payload = read_payload(payload_file)
    try:
        options = load_options(config_path, key=key, host=host, retries=retries, debug=debug or None)
        sp = SparkPost(options.merged({"async": False}))
        response = sp.transmissions.post(payload)
    except ClientError as exc:
        status = exc.status_code if exc.status_code is not None else "-"
        print_error(f"request failed ({status}): {exc}")
        if exc.request is not None:
            print_json({"method": exc.request.method, "url": exc.request.url, "body": exc.request.json()})
        sys.exit(1)
    except SparkPostError as exc:
        print_error(str(exc))
        sys.exit(1)

    if response.request is not None:
        print_json({"method": response.request.method, "url": response.request.url,
                    "body": response.request.json()})
    console.print(f"Status: {response.status_code}")
    print_json(response.body_decoded)
    if not response.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
