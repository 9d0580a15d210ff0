# ABOUTME: Validate command for local CloudFormation templates
# ABOUTME: Converts the template to JSON and submits it to ValidateTemplate

"""Validate command - Check a template with CloudFormation."""

from cleo.helpers import argument

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.cf_exceptions import TemplateError
from cfstack.cli.utils.display import print_info
from cfstack.cli.utils.validators import template_exists


class ValidateCommand(AwsCommand):
    name = "validate"
    description = "Validate a template"

    arguments = [argument("template", description="Template file to validate", optional=True)]

    options = [*COMMON_OPTIONS]

    def perform(self) -> int:
        template = self.argument("template")
        self.show_target()
        print_info(self.console, "Template", template)

        path = template_exists(template)
        result = self.orchestrator().validate(path)

        if not result.valid:
            self.console.print(f"[bright_red]Invalid Template![/bright_red] {path.name}")
            raise TemplateError(result.error or "Template validation failed")

        self.console.print(f"[bright_green]Valid Template![/bright_green] {path.name}")
        if result.description:
            print_info(self.console, "Description", result.description)
        for parameter in result.parameters:
            print_info(self.console, "Parameter", parameter["ParameterKey"])
        return 0
