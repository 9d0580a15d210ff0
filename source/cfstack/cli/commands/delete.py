# ABOUTME: Delete command for stacks, template buckets and log groups
# ABOUTME: Confirms the permanent removal, checks the target exists, then deletes it

"""Delete command - Remove a stack, bucket or log group."""

from cleo.helpers import argument, option
from rich.prompt import Confirm

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.aws import bucket_exists, delete_log_group
from cfstack.cli.utils.cf_exceptions import BucketError, CfstackError, StackError
from cfstack.cli.utils.cloudformation import OperationKind, StackOperation
from cfstack.cli.utils.display import print_progress
from cfstack.cli.utils.storage import TemplateStore

DELETE_TYPES = ("stack", "bucket", "logs")


class DeleteCommand(AwsCommand):
    name = "delete"
    description = "Delete a stack, bucket or log group"

    arguments = [
        argument("type", description="What to delete (stack/bucket/logs)", optional=True),
        argument("name", description="Name of the stack, bucket or log group", optional=True),
    ]

    options = [
        *COMMON_OPTIONS,
        option("force", description="Skip confirmation prompt", flag=True),
    ]

    def perform(self) -> int:
        """Execute the delete command."""
        delete_type = self.argument("type")
        name = self.argument("name")

        if delete_type is None or name is None:
            raise CfstackError("Both [type] and [name] arguments must be supplied")
        if delete_type not in DELETE_TYPES:
            raise CfstackError("Invalid [type], must be stack, bucket or logs")

        if not self.option("force"):
            if not Confirm.ask("[bold red]This is permanent, are you sure?[/bold red]"):
                self.console.print("[bright_yellow]Delete operation canceled[/bright_yellow]")
                return 0

        self.show_target()

        if delete_type == "stack":
            return self._delete_stack(name)
        elif delete_type == "bucket":
            return self._delete_bucket(name)
        return self._delete_logs(name)

    def _delete_stack(self, name: str) -> int:
        orchestrator = self.orchestrator()
        if not orchestrator.stack_exists(name):
            raise StackError(f"{name} does not exist", stack_name=name)

        operation = StackOperation(kind=OperationKind.DELETE, stack_name=name, region=self.region_name)
        return self.report(operation, orchestrator.delete(operation))

    def _delete_bucket(self, name: str) -> int:
        if not bucket_exists(self.session, name):
            raise BucketError(f"{name} does not exist")

        removed = TemplateStore(self.session, name, self.region_name).delete_bucket()
        print_progress(self.console, "Deleting", name, "AWS::S3::Bucket", f"{removed} objects", "DELETE_COMPLETE")
        return 0

    def _delete_logs(self, name: str) -> int:
        delete_log_group(self.session, name)
        print_progress(self.console, "Deleting", name, "AWS::Logs::LogGroup", "", "DELETE_COMPLETE")
        return 0
