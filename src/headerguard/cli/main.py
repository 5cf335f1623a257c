# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""HeaderGuard CLI — validate configuration files and preview headers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from headerguard.cli.console import console
from headerguard.core.config import Config
from headerguard.kernel.exceptions import ConfigurationException, HeaderValidationError
from headerguard.logging import LoggingPort, StructlogAdapter
from headerguard.policy.configuration import PolicyConfiguration
from headerguard.policy.resolver import PolicyRequest, PolicyResolver

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class CliOptions:
    """Group-level options shared by every command."""

    log_level: str | None = None
    logging_port: LoggingPort = field(default_factory=StructlogAdapter)


def _load_policy(options: CliOptions, path: Path, profiles: tuple[str, ...]) -> PolicyConfiguration:
    """Load and validate *path*, printing the error and exiting 1 on failure."""
    logging_port = options.logging_port
    try:
        config = Config.from_file(path, active_profiles=list(profiles))
        logging_port.configure(config)
        if options.log_level is not None:
            logging_port.set_level("headerguard", options.log_level)
        policy = PolicyConfiguration.from_config(config)
    except HeaderValidationError as exc:
        console.print(f"[error]✗ {exc.kind.header_label}:[/error] {escape(exc.reason)}")
        raise SystemExit(1) from None
    except ConfigurationException as exc:
        console.print(f"[error]✗[/error] {escape(str(exc))}")
        raise SystemExit(1) from None
    logging_port.get_logger(__name__).debug(
        "header_policy_loaded", path=str(path), default_headers=len(policy.default_headers)
    )
    return policy


_file_argument = click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
_profile_option = click.option(
    "--profile", "-p", "profiles", multiple=True, help="Profile overlay to merge (repeatable)."
)


@click.group()
@click.version_option(package_name="headerguard")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Level for headerguard loggers, overriding the configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """HeaderGuard — security response header policies."""
    options = ctx.ensure_object(CliOptions)
    if log_level is not None:
        options.log_level = log_level.upper()


@cli.command("check")
@_file_argument
@_profile_option
@click.pass_obj
def check_command(options: CliOptions, path: Path, profiles: tuple[str, ...]) -> None:
    """Validate a header configuration file."""
    policy = _load_policy(options, path, profiles)
    console.print(f"[success]✓[/success] Configuration is valid ({len(policy.default_headers)} headers by default)")


@cli.command("show")
@_file_argument
@_profile_option
@click.option("--insecure", is_flag=True, help="Resolve as a plain HTTP request.")
@click.pass_obj
def show_command(options: CliOptions, path: Path, profiles: tuple[str, ...], insecure: bool) -> None:
    """Print the headers a request would receive."""
    policy = _load_policy(options, path, profiles)
    headers = PolicyResolver(policy).resolve(PolicyRequest(secure=not insecure))

    table = Table(title="Security headers", border_style="dim")
    table.add_column("Header", style="info", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for name, value in headers.items():
        table.add_row(name, escape(value))
    console.print(table)
