# ABOUTME: Account command showing the caller's AWS identity
# ABOUTME: Prints STS identity plus IAM user details when available

"""Account command - Show AWS account information."""

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.aws import get_account_details
from cfstack.cli.utils.display import print_account


class AccountCommand(AwsCommand):
    name = "account"
    description = "Show AWS account information"

    options = [*COMMON_OPTIONS]

    def perform(self) -> int:
        self.show_target()
        print_account(self.console, get_account_details(self.session))
        return 0
