# ABOUTME: CloudFormation stack orchestrator using boto3 SDK
# ABOUTME: Runs create/update/delete and streams deduplicated stack events until the waiter resolves

"""Stack operation orchestration for boto3-based CloudFormation deployments."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import boto3
import cfn_flip
import yaml
from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from .cf_exceptions import TemplateError
from .events import DisplayedEventSet, StackEvent
from .pagination import PageResult, paginate_all
from .storage import template_url
from .validators import Parameter

logger = logging.getLogger(__name__)

CAPABILITIES = ["CAPABILITY_IAM", "CAPABILITY_NAMED_IAM"]
DEFAULT_POLL_INTERVAL = 5
# Total time the waiters may run, matching their default 120 attempts at 30 seconds
WAIT_WINDOW_SECONDS = 3600
NO_UPDATES_MESSAGE = "No updates are to be performed"

# Everything except DELETE_COMPLETE snapshots and the import/review states
LISTED_STACK_STATUSES = [
    "CREATE_IN_PROGRESS",
    "CREATE_FAILED",
    "CREATE_COMPLETE",
    "ROLLBACK_IN_PROGRESS",
    "ROLLBACK_FAILED",
    "ROLLBACK_COMPLETE",
    "DELETE_IN_PROGRESS",
    "DELETE_FAILED",
    "UPDATE_IN_PROGRESS",
    "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS",
    "UPDATE_COMPLETE",
    "UPDATE_FAILED",
    "UPDATE_ROLLBACK_IN_PROGRESS",
    "UPDATE_ROLLBACK_FAILED",
    "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS",
    "UPDATE_ROLLBACK_COMPLETE",
    "REVIEW_IN_PROGRESS",
]


class OperationKind(Enum):
    """Mutating stack operations with the waiter that tracks each."""

    CREATE = ("stack_create_complete", "Creating")
    UPDATE = ("stack_update_complete", "Updating")
    DELETE = ("stack_delete_complete", "Deleting")

    def __init__(self, waiter_name: str, action: str):
        self.waiter_name = waiter_name
        self.action = action


@dataclass(frozen=True)
class StackOperation:
    """Everything one create, update or delete call needs."""

    kind: OperationKind
    stack_name: str
    region: str
    bucket: str | None = None
    template_key: str | None = None
    parameters: tuple[Parameter, ...] = ()
    protect: bool = False

    @property
    def template_url(self) -> str:
        return template_url(self.bucket, self.region, self.template_key)


@dataclass
class PollState:
    """Progress-streaming state owned by a single operation."""

    started_at: datetime
    interval: float = DEFAULT_POLL_INTERVAL
    displayed: DisplayedEventSet = field(default_factory=DisplayedEventSet)
    stopped: threading.Event = field(default_factory=threading.Event)
    last_printed: datetime | None = None

    def stop(self) -> None:
        self.stopped.set()


@dataclass
class OperationResult:
    """Outcome of a stack operation."""

    success: bool
    stack_id: str | None = None
    changed: bool = True
    error: str | None = None
    message: str | None = None


@dataclass
class ValidationResult:
    """Outcome of a template validation request."""

    valid: bool
    description: str | None = None
    parameters: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None


class StackOrchestrator:
    """
    Issues mutating stack requests and follows them to a terminal state.

    While the boto3 waiter blocks on the calling thread, a streaming thread
    fetches the stack's events every ``poll_interval`` seconds and hands new
    ones to ``on_event``. The waiter resolving, successfully or not, is the
    only thing that stops the stream; the streamer is always joined before
    the operation returns.
    """

    def __init__(
        self,
        session: boto3.Session,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        on_event: Callable[[str, str, StackEvent], None] = None,
        on_accepted: Callable[[StackOperation, str], None] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            session: boto3 session bound to the target profile and region
            poll_interval: Seconds between event fetches and waiter checks
            on_event: Callback receiving (action, stack_name, event) for each new event
            on_accepted: Callback receiving (operation, stack_id) once a request is accepted
        """
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {poll_interval}")
        self.session = session
        self.poll_interval = poll_interval
        self.on_event = on_event
        self.on_accepted = on_accepted
        self._cf_client = None

    @property
    def cf_client(self):
        """Lazy-loaded CloudFormation client."""
        if not self._cf_client:
            self._cf_client = self.session.client("cloudformation")
        return self._cf_client

    def create(self, operation: StackOperation) -> OperationResult:
        """Create a stack from an uploaded template and wait for it to finish."""
        state = self._new_poll_state()
        params = {
            "StackName": operation.stack_name,
            "TemplateURL": operation.template_url,
            "Parameters": [param.to_api() for param in operation.parameters],
            "Capabilities": CAPABILITIES,
            "OnFailure": "DELETE",
            "EnableTerminationProtection": operation.protect,
        }

        try:
            response = self.cf_client.create_stack(**params)
        except ClientError as e:
            return self._rejected(operation, e)

        return self._run(operation, response["StackId"], state)

    def update(self, operation: StackOperation) -> OperationResult:
        """
        Update a stack from an uploaded template and wait for it to finish.

        An update with nothing to change is reported as a successful result
        with ``changed`` set to False.
        """
        state = self._new_poll_state()
        params = {
            "StackName": operation.stack_name,
            "TemplateURL": operation.template_url,
            "Parameters": [param.to_api() for param in operation.parameters],
            "Capabilities": CAPABILITIES,
        }

        try:
            response = self.cf_client.update_stack(**params)
        except ClientError as e:
            if NO_UPDATES_MESSAGE in str(e):
                return OperationResult(success=True, changed=False, message=NO_UPDATES_MESSAGE)
            return self._rejected(operation, e)

        return self._run(operation, response["StackId"], state)

    def delete(self, operation: StackOperation) -> OperationResult:
        """
        Delete a stack and wait for it to disappear.

        The caller checks that the stack exists first. Events are followed by
        stack id so they stay queryable after the stack record is gone.
        """
        state = self._new_poll_state()
        target = self._stack_id(operation.stack_name) or operation.stack_name

        try:
            self.cf_client.delete_stack(StackName=target)
        except ClientError as e:
            return self._rejected(operation, e)

        result = self._run(operation, target, state)
        if result.success and self.on_event:
            self.on_event(operation.kind.action, operation.stack_name, self._delete_complete_event(operation))
        return result

    def validate(self, template_path: str | Path) -> ValidationResult:
        """
        Parse a local template into JSON and ask CloudFormation to validate it.

        Raises:
            TemplateError: when the file cannot be read or parsed
        """
        template_body = self._template_json(template_path)
        try:
            response = self.cf_client.validate_template(TemplateBody=template_body)
        except ClientError as e:
            return ValidationResult(valid=False, error=e.response["Error"]["Message"])

        return ValidationResult(
            valid=True,
            description=response.get("Description"),
            parameters=response.get("Parameters", []),
        )

    def stack_exists(self, stack_name: str) -> bool:
        """Check if a stack exists."""
        return self._stack_id(stack_name) is not None

    def describe_events(self, stack: str) -> PageResult:
        """Fetch every event recorded for a stack name or id."""
        result = paginate_all(self.cf_client, "describe_stack_events", "StackEvents", StackName=stack)
        result.items = [StackEvent.from_api(item) for item in result.items]
        return result

    def list_stacks(self) -> PageResult:
        """List stack summaries in the listed statuses."""
        return paginate_all(self.cf_client, "list_stacks", "StackSummaries", StackStatusFilter=LISTED_STACK_STATUSES)

    def list_exports(self) -> PageResult:
        return paginate_all(self.cf_client, "list_exports", "Exports")

    def poll_tick(self, operation: StackOperation, stack: str, state: PollState) -> list[StackEvent]:
        """
        Fetch events once and emit the ones not shown yet.

        New events are emitted in timestamp order. Events older than the
        operation's start, or older than the last emitted event, are marked
        as seen without being emitted.

        Returns:
            The events emitted by this tick
        """
        result = self.describe_events(stack)
        if result.errors:
            logger.debug("Event fetch for %s incomplete: %s", stack, result.errors[0])

        fresh = sorted(state.displayed.mark_and_filter(result.items), key=lambda event: event.timestamp)
        shown = []
        for event in fresh:
            if event.timestamp < (state.last_printed or state.started_at):
                logger.debug("Suppressing event %s from %s", event.event_id, event.timestamp)
                continue
            state.last_printed = event.timestamp
            shown.append(event)
            if self.on_event:
                self.on_event(operation.kind.action, operation.stack_name, event)
        return shown

    def _new_poll_state(self) -> PollState:
        return PollState(started_at=datetime.now(timezone.utc), interval=self.poll_interval)

    def _run(self, operation: StackOperation, stack_id: str, state: PollState) -> OperationResult:
        logger.debug("%s accepted for %s: %s", operation.kind.name, operation.stack_name, stack_id)
        if self.on_accepted:
            self.on_accepted(operation, stack_id)

        error = self._track(operation, stack_id, state)
        if error:
            return OperationResult(success=False, stack_id=stack_id, error=error)
        return OperationResult(success=True, stack_id=stack_id)

    def _track(self, operation: StackOperation, stack: str, state: PollState) -> str | None:
        """Stream events until the waiter resolves. Returns the failure message, if any."""
        streamer = threading.Thread(
            target=self._stream_events,
            args=(operation, stack, state),
            name=f"events-{operation.stack_name}",
            daemon=True,
        )
        streamer.start()

        error = None
        try:
            waiter = self.cf_client.get_waiter(operation.kind.waiter_name)
            waiter.wait(
                StackName=stack,
                WaiterConfig={
                    "Delay": self.poll_interval,
                    "MaxAttempts": max(1, int(WAIT_WINDOW_SECONDS / self.poll_interval)),
                },
            )
        except WaiterError as e:
            logger.debug("Waiter %s failed for %s: %s", operation.kind.waiter_name, stack, e)
            error = self._get_stack_failure_reason(stack) or str(e)
        except (ClientError, BotoCoreError) as e:
            logger.debug("Waiter %s errored for %s: %s", operation.kind.waiter_name, stack, e)
            error = str(e)
        finally:
            state.stop()
            streamer.join()

        return error

    def _stream_events(self, operation: StackOperation, stack: str, state: PollState) -> None:
        while not state.stopped.wait(state.interval):
            self.poll_tick(operation, stack, state)
        # Final pass so operations finishing before the first interval still show their events
        self.poll_tick(operation, stack, state)

    def _rejected(self, operation: StackOperation, error: ClientError) -> OperationResult:
        message = error.response["Error"]["Message"]
        logger.debug("%s rejected for %s: %s", operation.kind.name, operation.stack_name, message)
        return OperationResult(success=False, error=message)

    def _stack_id(self, stack_name: str) -> str | None:
        try:
            response = self.cf_client.describe_stacks(StackName=stack_name)
            if response["Stacks"]:
                return response["Stacks"][0]["StackId"]
            return None
        except ClientError as e:
            if e.response["Error"]["Code"] == "ValidationError":
                return None
            raise

    def _get_stack_failure_reason(self, stack: str) -> str | None:
        """Get the earliest failure reason from stack events."""
        events = sorted(self.describe_events(stack).items, key=lambda event: event.timestamp)
        for event in events:
            status = event.resource_status or ""
            reason = event.status_reason or ""
            if "FAILED" in status and "cancelled" not in reason.lower():
                return f"{event.resource_type} ({event.logical_resource_id}): {reason}"
        return None

    @staticmethod
    def _delete_complete_event(operation: StackOperation) -> StackEvent:
        return StackEvent(
            event_id=f"{operation.stack_name}-delete-complete",
            timestamp=datetime.now(timezone.utc),
            resource_type="AWS::CloudFormation::Stack",
            logical_resource_id=operation.stack_name,
            resource_status="DELETE_COMPLETE",
        )

    @staticmethod
    def _template_json(template_path: str | Path) -> str:
        template_path = Path(template_path)
        try:
            # Format is sniffed from the content; .template files may hold either
            template, _ = cfn_flip.load(template_path.read_text())
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise TemplateError(f"Could not parse {template_path.name}: {e}")
        return cfn_flip.dump_json(template)
