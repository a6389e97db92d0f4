"""
Main CLI entry point for datepipe.

This module provides the Click-based command-line interface: global options
for configuration files and verbosity, plus the ``format`` and ``aliases``
commands.
"""

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from . import __version__
from .core.aliases import DEFAULT_ALIASES
from .core.config import Config, resolve_locale_id
from .core.exceptions import ConfigurationError, DatePipeError, handle_exception
from .core.pipe import DatePipe
from .utils.logging import configure_logging


class CliContext:
    """Context object for CLI commands."""

    def __init__(self) -> None:
        self.config_files: List[Path] = []
        self.verbosity: int = 0
        self.config: Optional[Config] = None

    def get_config(self) -> Config:
        """Load configuration if not already loaded."""
        if self.config is None:
            try:
                config = Config(self.config_files or None)
            except DatePipeError:
                raise
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to load configuration: {e}", previous_exception=e
                )

            issues = config.validate()
            if issues:
                raise ConfigurationError("; ".join(issues))
            self.config = config
        return self.config

    def create_pipe(self, locale_id: Optional[str] = None) -> DatePipe:
        if locale_id is None:
            locale_id = resolve_locale_id(self.get_config())
        return DatePipe(locale_id)


def validate_config_file(ctx, param, value):
    """Validate config file paths."""
    if not value:
        return []

    config_files = []
    for path_str in value:
        path = Path(path_str)
        if not path.exists():
            raise click.BadParameter(f"Configuration file does not exist: {path}")
        if not path.is_file():
            raise click.BadParameter(f"Configuration path is not a file: {path}")
        config_files.append(path)

    return config_files


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    multiple=True,
    callback=validate_config_file,
    help="Configuration file to read (can be used multiple times)",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times)")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times)")
@click.version_option(version=__version__, prog_name="datepipe")
@click.pass_context
def cli(ctx: click.Context, config: Tuple[Path, ...], verbose: int, quiet: int) -> None:
    """
    Locale-aware date formatting.

    Formats dates, epoch milliseconds and ISO calendar dates following the
    conventions of a locale.
    """
    cli_ctx = CliContext()
    cli_ctx.config_files = list(config)
    cli_ctx.verbosity = max(-2, min(3, verbose - quiet))
    configure_logging(cli_ctx.verbosity)

    ctx.obj = cli_ctx

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _read_values(values: Tuple[str, ...]) -> List[str]:
    if values == ("-",):
        return [line.rstrip("\r\n") for line in sys.stdin if line.strip()]
    return list(values)


@cli.command("format")
@click.argument("values", nargs=-1, required=True)
@click.option("--format", "-f", "format_token", default=None, help="Alias name or symbolic pattern")
@click.option("--locale", "-l", "locale_id", default=None, help="Locale identifier, e.g. en-US")
@click.pass_obj
def format_command(
    cli_ctx: CliContext,
    values: Tuple[str, ...],
    format_token: Optional[str],
    locale_id: Optional[str],
) -> None:
    """
    Format VALUES as dates, one result per line.

    Pass - to read values from standard input.
    """
    pipe = cli_ctx.create_pipe(locale_id)
    if format_token is None:
        format_token = cli_ctx.get_config().default_format

    for value in _read_values(values):
        click.echo(pipe.transform(value, format_token))


@cli.command("aliases")
def aliases_command() -> None:
    """List the named formats and the patterns they stand for."""
    width = max(len(alias) for alias in DEFAULT_ALIASES)
    for alias, pattern in DEFAULT_ALIASES.items():
        click.echo(f"{alias.ljust(width)}  {pattern}")


def handle_keyboard_interrupt() -> int:
    click.echo("\ndatepipe: Operation cancelled by user", err=True)
    return 130


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        cli(args=args, standalone_mode=False)
        return 0
    except DatePipeError as e:
        return handle_exception(e)
    except click.exceptions.Exit as e:
        return e.exit_code
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.Abort:
        return handle_keyboard_interrupt()
    except KeyboardInterrupt:
        return handle_keyboard_interrupt()
    except Exception as e:
        return handle_exception(e)


if __name__ == "__main__":
    sys.exit(main())
