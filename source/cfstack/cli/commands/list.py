# ABOUTME: List command for stacks, exports, buckets and log groups
# ABOUTME: Each listing is one paginated fetch followed by formatted output

"""List command - Report stacks, exports, buckets or log groups."""

from cleo.helpers import argument

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.aws import list_buckets, list_log_groups
from cfstack.cli.utils.cf_exceptions import CfstackError
from cfstack.cli.utils.display import print_buckets, print_exports, print_incomplete, print_log_groups, print_stacks

LIST_TYPES = ("stacks", "exports", "buckets", "logs")


class ListCommand(AwsCommand):
    name = "list"
    description = "List stacks, exports, buckets or log groups"

    arguments = [
        argument("type", description="What to list (stacks/exports/buckets/logs)", optional=True, default="stacks"),
    ]

    options = [*COMMON_OPTIONS]

    def perform(self) -> int:
        """Execute the list command."""
        list_type = self.argument("type")
        if list_type not in LIST_TYPES:
            raise CfstackError("Invalid [type], must be stacks, exports, buckets or logs")

        self.show_target()

        if list_type == "buckets":
            print_buckets(self.console, list_buckets(self.session))
            return 0

        if list_type == "logs":
            result = list_log_groups(self.session)
            self.require_items(result, "log groups")
            print_log_groups(self.console, result.items)
        elif list_type == "exports":
            result = self.orchestrator().list_exports()
            self.require_items(result, "exports")
            print_exports(self.console, result.items)
        else:
            result = self.orchestrator().list_stacks()
            self.require_items(result, "stacks")
            print_stacks(self.console, result.items)

        print_incomplete(self.console, result, list_type)
        return 0
