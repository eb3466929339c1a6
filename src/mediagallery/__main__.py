"""
MediaGallery Package Main Entry Point

This module serves as the main entry point when the package is run as a module
using `python -m mediagallery`. It delegates to the Typer application.
"""

import logging
import sys

from mediagallery.cli.common.error_handler import handle_cli_error
from mediagallery.cli.typer_app import app
from mediagallery.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_ERROR)
    except SystemExit:
        raise
    except Exception as e:  # noqa: BLE001
        sys.exit(handle_cli_error(e, "mediagallery-main"))
