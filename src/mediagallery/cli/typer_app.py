"""
MediaGallery Typer CLI Application

Entry point of the ``mediagallery`` command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from mediagallery.cli.build_handler import handle_build_command
from mediagallery.cli.common.context import CliContext, LogLevel, set_cli_context
from mediagallery.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from mediagallery.cli.inspect_handler import handle_inspect_command
from mediagallery.config import BuildRequest, load_settings
from mediagallery.shared.constants import CLICommands, CLIDefaults, CLIHelp
from mediagallery.shared.logging import setup_structured_logger

__version__ = CLIDefaults.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
    config_file: Path | None = None,
) -> None:
    """
    Process the global options before any command runs.

    Sets the CLI context and configures logging: Rich on stderr normally,
    JSON lines when --json is given. Settings come from --config (or
    MEDIAGALLERY_CONFIG) and the environment.
    """
    if version:
        version_callback(value=True)

    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        config_file=config_file,
    )
    set_cli_context(context)

    settings = load_settings(config_file)
    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=settings.log_file,
        use_rich_console=not json_output,
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.INFO,
    json_output: Annotated[bool, json_output_option] = False,
    config_file: Annotated[Path | None, config_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, json_output, version, config_file)
    except typer.Exit:
        raise
    except Exception as e:
        from mediagallery.cli.common.error_handler import handle_cli_error

        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


@app.command(CLICommands.BUILD)
def build_command_typer(
    directory: Path = typer.Argument(
        ...,
        help=CLIHelp.BUILD_DIRECTORY_HELP,
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
    ),
    height: int | None = typer.Option(
        None,
        "--height",
        help=CLIHelp.BUILD_HEIGHT_HELP,
    ),
    sortby: str | None = typer.Option(
        None,
        "--sortby",
        help=CLIHelp.BUILD_SORTBY_HELP,
    ),
    exclude: str | None = typer.Option(
        None,
        "--exclude",
        help=CLIHelp.BUILD_EXCLUDE_HELP,
    ),
    procs: int | None = typer.Option(
        None,
        "--procs",
        help=CLIHelp.BUILD_PROCS_HELP,
    ),
) -> None:
    """
    Generate or refresh the gallery of DIR.

    The gallery is written to DIR.html next to DIR. Previews of files that
    did not change since the previous run are reused, and the file is only
    rewritten when its content changes.

    Examples:
        mediagallery build ~/Pictures/2021

        mediagallery build ~/Pictures/2021 --height 240 --sortby file_path

        mediagallery build ~/Pictures/2021 --exclude '/tmp/|\\.thumbs/'
    """
    request = BuildRequest(
        directory=directory,
        height=height,
        sort_by=sortby,
        exclude=exclude,
        procs=procs,
    )
    exit_code = handle_build_command(request)
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


@app.command(CLICommands.INSPECT)
def inspect_command_typer(
    artifact: Path = typer.Argument(
        ...,
        help=CLIHelp.INSPECT_ARTIFACT_HELP,
        file_okay=True,
        dir_okay=False,
    ),
) -> None:
    """
    List the configuration and entries of an existing gallery.

    Examples:
        mediagallery inspect ~/Pictures/2021.html

        mediagallery --json inspect ~/Pictures/2021.html
    """
    exit_code = handle_inspect_command(artifact)
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)


if __name__ == "__main__":
    app()
