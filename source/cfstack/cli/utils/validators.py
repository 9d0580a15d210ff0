# ABOUTME: Input parsing and validation for CLI commands
# ABOUTME: Handles --params strings, template paths and stack names

"""Input validators for CLI commands."""

import re
from dataclasses import dataclass
from pathlib import Path

from .cf_exceptions import ParameterError, StackError, TemplateError

TEMPLATE_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class Parameter:
    """A stack parameter passed through to CloudFormation verbatim."""

    key: str
    value: str

    def to_api(self) -> dict[str, str]:
        return {"ParameterKey": self.key, "ParameterValue": self.value}


def parse_params(value: str | None) -> list[Parameter]:
    """Parse a ``key=value,key=value`` string.

    Order is preserved and duplicate keys are kept. Only the first ``=`` of
    each pair separates key from value, so values may contain ``=``.
    """
    if not value:
        return []

    params = []
    for element in value.split(","):
        if not element.strip():
            continue
        key, sep, param_value = element.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ParameterError(f"Invalid parameter '{element}', expected key=value")
        params.append(Parameter(key=key, value=param_value))
    return params


def template_exists(template: str | None) -> Path:
    """Return the template path, raising TemplateError if it is not a file."""
    if not template:
        raise TemplateError("Missing [template] argument")

    path = Path(template)
    if not path.exists():
        raise TemplateError(f"{template} not found")
    if path.is_dir():
        raise TemplateError(f"{template} is a directory, use --dir")
    return path


def directory_exists(directory: str | None) -> Path:
    """Return the directory path, raising TemplateError if it is not a directory."""
    if not directory:
        raise TemplateError("Missing [template] argument")

    path = Path(directory)
    if not path.exists():
        raise TemplateError(f"{directory} not found")
    if not path.is_dir():
        raise TemplateError(f"{directory} is a file, remove --dir")
    return path


def is_template_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in TEMPLATE_SUFFIXES


def extract_template_name(template: str) -> str:
    """Derive a stack name from a template path (``infra/web-app.yaml`` -> ``web-app``)."""
    return Path(template).stem


def validate_stack_name(name: str) -> bool:
    """Validate CloudFormation stack name."""
    if not name or len(name) > 128:
        return False

    # Stack names can contain only alphanumeric characters and hyphens
    pattern = r"^[a-zA-Z][a-zA-Z0-9-]*$"
    return bool(re.match(pattern, name))


def require_stack_name(name: str | None) -> str:
    """Return ``name`` or raise StackError when it is missing or malformed."""
    if not name:
        raise StackError("Missing [stack] argument")
    if not validate_stack_name(name):
        raise StackError(f"Invalid stack name '{name}'", stack_name=name)
    return name


def validate_aws_region(region: str) -> bool:
    """Validate AWS region format."""
    if not region:
        return False

    # AWS region format: us-east-1, eu-west-2, etc.
    pattern = r"^[a-z]{2}-[a-z]+-\d{1,2}$"
    return bool(re.match(pattern, region))
