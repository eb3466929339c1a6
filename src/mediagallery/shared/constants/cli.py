"""
CLI Configuration Constants

This module contains all constants related to command-line interface
configuration, default values, and user-facing messages.
"""

from __future__ import annotations


class CLIDefaults:
    """Default values and exit codes."""

    VERSION = "0.1.0"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_USAGE = 2


class CLICommands:
    """Command names."""

    BUILD = "build"
    INSPECT = "inspect"


class CLIHelp:
    """Help texts."""

    APP_NAME = "mediagallery"
    APP_DESCRIPTION = (
        "MediaGallery - generate a static HTML gallery of the images and videos "
        "in a directory, reusing previews from the previous run."
    )
    APP_STYLE = "rich"
    VERSION_TEXT = "mediagallery {version}"
    BUILD_DIRECTORY_HELP = "Directory to generate the gallery from (writes DIR.html next to it)"
    BUILD_HEIGHT_HELP = "Pixel height of each preview (default: previous gallery value, else 160)"
    BUILD_SORTBY_HELP = "Sort the gallery by 'creation_date' or 'file_path'"
    BUILD_EXCLUDE_HELP = "Regular expression of paths to exclude"
    BUILD_PROCS_HELP = "Number of concurrent workers (default: number of CPUs)"
    INSPECT_ARTIFACT_HELP = "Gallery HTML file to inspect"


class CLIMessages:
    """User-facing message templates."""

    NO_CHANGES = "no changes made to {path}"
    WROTE = "wrote {path}: {total} items ({cached} from cache, {failed} failed)"
    INSPECT_TITLE = "{path}: {count} items"
