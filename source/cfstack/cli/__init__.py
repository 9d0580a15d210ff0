# ABOUTME: CLI module for cfstack
# ABOUTME: Provides the command-line interface for stack deployment and reporting

"""Command-line interface for cfstack."""

import logging
import os
import sys

from cleo.application import Application

from cfstack import __version__

from .commands import (
    AccountCommand,
    CertsCommand,
    ConfigCommand,
    DeleteCommand,
    DeployCommand,
    ListCommand,
    UploadCommand,
    ValidateCommand,
)


def configure_logging() -> None:
    """Send diagnostic logging to stderr; DEBUG when CFSTACK_DEBUG is set."""
    debug = os.environ.get("CFSTACK_DEBUG", "").lower() in ("true", "1", "yes", "y")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


def create_application() -> Application:
    """Create the CLI application."""
    application = Application("cfstack", __version__)

    application.add(DeployCommand())
    application.add(DeleteCommand())
    application.add(ListCommand())
    application.add(UploadCommand())
    application.add(AccountCommand())
    application.add(ValidateCommand())
    application.add(CertsCommand())
    application.add(ConfigCommand())

    return application


def main():
    """Main entry point for the CLI."""
    configure_logging()
    application = create_application()
    application.run()


if __name__ == "__main__":
    main()
