# ABOUTME: Deploy command for CloudFormation stacks using boto3
# ABOUTME: Uploads the template, then creates or updates the stack and streams its events

"""Deploy command - Create or update a stack from a local template."""

from cleo.helpers import argument, option

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.cf_exceptions import UploadError
from cfstack.cli.utils.cloudformation import OperationKind, StackOperation
from cfstack.cli.utils.display import print_info
from cfstack.cli.utils.validators import extract_template_name, parse_params, require_stack_name, template_exists


class DeployCommand(AwsCommand):
    name = "deploy"
    description = "Deploy a stack from a template (create or update)"

    arguments = [
        argument("template", description="Template file to deploy", optional=True),
        argument("name", description="Stack name (defaults to the template file name)", optional=True),
    ]

    options = [
        *COMMON_OPTIONS,
        option("params", description="Stack parameters as key=value,key=value", flag=False),
        option("protect", description="Enable termination protection on create", flag=True),
    ]

    def perform(self) -> int:
        """Execute the deploy command."""
        template = self.argument("template")
        params = parse_params(self.option("params"))
        protect = bool(self.option("protect"))

        self.show_target()
        print_info(self.console, "Stack Parameters", ", ".join(f"{p.key}={p.value}" for p in params) or "none")
        print_info(self.console, "Template", template)
        print_info(self.console, "Termination Protection", protect)

        path = template_exists(template)
        stack_name = require_stack_name(self.argument("name") or extract_template_name(template))
        print_info(self.console, "Stack Name", stack_name)

        bucket = self.resolve_bucket()
        print_info(self.console, "Bucket", bucket)

        upload = self.template_store(bucket).upload(path)
        if not upload.success:
            raise UploadError("; ".join(f"{name}: {error}" for name, error in upload.errors.items()))

        orchestrator = self.orchestrator()
        kind = OperationKind.UPDATE if orchestrator.stack_exists(stack_name) else OperationKind.CREATE
        operation = StackOperation(
            kind=kind,
            stack_name=stack_name,
            region=self.region_name,
            bucket=bucket,
            template_key=upload.uploaded[0],
            parameters=tuple(params),
            protect=protect and kind is OperationKind.CREATE,
        )

        if kind is OperationKind.CREATE:
            result = orchestrator.create(operation)
        else:
            result = orchestrator.update(operation)

        return self.report(operation, result)
