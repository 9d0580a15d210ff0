# ABOUTME: Commands module for the cfstack CLI
# ABOUTME: Contains all CLI command implementations

"""CLI commands for cfstack."""

from .account import AccountCommand
from .certs import CertsCommand
from .config import ConfigCommand
from .delete import DeleteCommand
from .deploy import DeployCommand
from .list import ListCommand
from .upload import UploadCommand
from .validate import ValidateCommand

__all__ = [
    "AccountCommand",
    "CertsCommand",
    "ConfigCommand",
    "DeleteCommand",
    "DeployCommand",
    "ListCommand",
    "UploadCommand",
    "ValidateCommand",
]
