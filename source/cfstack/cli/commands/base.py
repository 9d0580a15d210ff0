# ABOUTME: Shared base for commands that talk to AWS
# ABOUTME: Resolves profile/region, builds sessions and turns cfstack errors into exit codes

"""Base command with AWS session handling and error-to-exit-code mapping."""

import logging

from botocore.exceptions import BotoCoreError, ClientError
from cleo.commands.command import Command
from cleo.helpers import option
from rich.console import Console

from cfstack.cli.utils.aws import create_session, get_bucket_name
from cfstack.cli.utils.cf_exceptions import CfstackError, QueryError, StackOperationError
from cfstack.cli.utils.cloudformation import OperationResult, StackOperation, StackOrchestrator
from cfstack.cli.utils.display import now, print_error, print_event, print_info, print_progress
from cfstack.cli.utils.pagination import PageResult
from cfstack.cli.utils.storage import TemplateStore
from cfstack.cli.utils.validators import validate_aws_region
from cfstack.config import Config

logger = logging.getLogger(__name__)

COMMON_OPTIONS = [
    option("profile", "p", description="AWS profile to use", flag=False),
    option("region", "r", description="AWS region to use", flag=False),
]


class AwsCommand(Command):
    """Base class for commands needing an AWS session."""

    def handle(self) -> int:
        """Run the command, reporting cfstack and AWS errors as exit codes."""
        self.console = Console()
        self.settings = Config.load()
        self._session = None

        try:
            return self.perform()
        except CfstackError as e:
            print_error(self.console, e)
            return e.exit_code
        except (ClientError, BotoCoreError) as e:
            logger.debug("Unhandled AWS error in %s", self.name, exc_info=True)
            print_error(self.console, e)
            return CfstackError.exit_code

    def perform(self) -> int:
        raise NotImplementedError

    @property
    def profile_name(self) -> str:
        return self.option("profile") or self.settings.profile

    @property
    def region_name(self) -> str:
        region = self.option("region") or self.settings.region
        if not validate_aws_region(region):
            raise CfstackError(f"Invalid region '{region}'")
        return region

    @property
    def session(self):
        if self._session is None:
            self._session = create_session(self.profile_name, self.region_name)
        return self._session

    def show_target(self, region: str | None = None) -> None:
        print_info(self.console, "AWS Profile", self.profile_name)
        print_info(self.console, "AWS Region", region or self.region_name)

    def resolve_bucket(self) -> str:
        """Configured bucket, or the account's cf-templates bucket for this region."""
        return self.settings.bucket or get_bucket_name(self.session, self.region_name)

    def orchestrator(self) -> StackOrchestrator:
        return StackOrchestrator(
            self.session,
            poll_interval=self.settings.poll_interval,
            on_event=self._show_event,
            on_accepted=self._show_accepted,
        )

    def template_store(self, bucket: str) -> TemplateStore:
        return TemplateStore(self.session, bucket, self.region_name, on_upload=self._show_upload)

    def report(self, operation: StackOperation, result: OperationResult) -> int:
        """Print the final outcome of a stack operation and return its exit code."""
        if not result.success:
            raise StackOperationError(
                result.error or "Operation failed",
                operation=operation.kind.name.lower(),
                stack_name=operation.stack_name,
            )
        if not result.changed:
            self.console.print(f"[dim]{now()}[/dim] [yellow]{result.message}[/yellow]")
            return 0

        self.console.print(f"\n[green]✓ {operation.kind.action} {operation.stack_name} finished[/green]")
        return 0

    @staticmethod
    def require_items(result: PageResult, what: str, error_cls: type[CfstackError] = QueryError) -> None:
        """Raise when a listing produced nothing but errors."""
        if result.errors and not result.items:
            raise error_cls(f"Could not list {what}: {result.errors[0]}")

    def _show_event(self, action, stack_name, event) -> None:
        print_event(self.console, action, stack_name, event)

    def _show_accepted(self, operation: StackOperation, stack_id: str) -> None:
        self.console.print(f"[dim]{now()}[/dim] StackId [cyan]{operation.stack_name}[/cyan] {stack_id}", highlight=False)

    def _show_upload(self, key: str, url: str) -> None:
        print_progress(self.console, "Uploading", key, url, "", "UPLOAD_COMPLETE")
