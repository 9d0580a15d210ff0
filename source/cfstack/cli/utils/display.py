# ABOUTME: Shared display utilities for consistent output formatting
# ABOUTME: Renders timestamped progress lines, coloured stack statuses and report blocks

"""Shared display utilities for consistent output formatting across commands."""

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape

from .events import StackEvent
from .pagination import PageResult

STATUS_STYLES = {
    "CREATE_IN_PROGRESS": "bright_yellow",
    "CREATE_COMPLETE": "green",
    "CREATE_FAILED": "red",
    "DELETE_IN_PROGRESS": "bright_red",
    "DELETE_COMPLETE": "green",
    "DELETE_FAILED": "red",
    "DELETE_SKIPPED": "yellow",
    "ROLLBACK_FAILED": "red",
    "ROLLBACK_IN_PROGRESS": "yellow",
    "ROLLBACK_COMPLETE": "red",
    "UPDATE_IN_PROGRESS": "bright_yellow",
    "UPDATE_COMPLETE": "green",
    "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS": "green",
    "UPDATE_ROLLBACK_IN_PROGRESS": "yellow",
    "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS": "yellow",
    "UPDATE_ROLLBACK_FAILED": "red",
    "UPDATE_ROLLBACK_COMPLETE": "green",
    "UPDATE_FAILED": "red",
    "REVIEW_IN_PROGRESS": "cyan",
    "UPLOAD_COMPLETE": "green",
}

DATE_FORMAT = "%B %d %Y, %I:%M:%S %p"


def now() -> str:
    """Current local time as HH:MM:SS."""
    return datetime.now().strftime("%H:%M:%S")


def format_datetime(value: datetime | None) -> str:
    if not value:
        return ""
    return value.strftime(DATE_FORMAT)


def status_text(status: str | None) -> str:
    """Wrap a resource or stack status in its colour markup."""
    if not status:
        return ""
    style = STATUS_STYLES.get(status)
    return f"[{style}]{status}[/{style}]" if style else status


def print_progress(
    console: Console,
    action: str,
    stack_name: str,
    resource_type: str,
    logical_id: str,
    status: str | None,
    reason: str | None = None,
    stamp: str | None = None,
) -> None:
    """Print one ``HH:MM:SS Action stack Type LogicalId STATUS reason`` line."""
    parts = [
        f"[dim]{stamp or now()}[/dim]",
        action,
        f"[cyan]{escape(stack_name)}[/cyan]",
        escape(resource_type),
        escape(logical_id),
        status_text(status),
        escape(reason or ""),
    ]
    console.print(" ".join(part for part in parts if part), highlight=False)


def print_event(console: Console, action: str, stack_name: str, event: StackEvent) -> None:
    print_progress(
        console,
        action,
        stack_name,
        event.resource_type,
        event.logical_resource_id,
        event.resource_status,
        event.status_reason,
        stamp=event.timestamp.astimezone().strftime("%H:%M:%S"),
    )


def print_error(console: Console, error: Exception | str) -> None:
    """Print a timestamped error line."""
    name = type(error).__name__ if isinstance(error, Exception) else ""
    message = f"{name}: {error}" if name else str(error)
    console.print(f"[dim]{now()}[/dim] [red]{escape(message)}[/red]", highlight=False)


def print_info(console: Console, label: str, value: Any) -> None:
    console.print(f"[bright_cyan]{label}:[/bright_cyan] {escape(str(value))}", highlight=False)


def print_incomplete(console: Console, result: PageResult, what: str) -> None:
    """Warn that a listing stopped early."""
    if result.complete:
        return
    console.print(
        f"[dim]{now()}[/dim] [yellow]Listing of {what} may be incomplete: {escape(str(result.errors[0]))}[/yellow]",
        highlight=False,
    )


def print_stacks(console: Console, stacks: list[dict[str, Any]]) -> None:
    for stack in stacks:
        console.print()
        console.print(f"[bright_cyan]StackName:[/bright_cyan] [yellow]{escape(stack['StackName'])}[/yellow]")
        print_info(console, "Description", stack.get("TemplateDescription", ""))
        print_info(console, "CreationTime", format_datetime(stack.get("CreationTime")))
        if stack.get("LastUpdatedTime"):
            print_info(console, "LastUpdatedTime", format_datetime(stack["LastUpdatedTime"]))
        console.print(f"[bright_cyan]StackStatus:[/bright_cyan] {status_text(stack.get('StackStatus'))}")


def print_exports(console: Console, exports: list[dict[str, Any]]) -> None:
    for export in exports:
        # arn:aws:cloudformation:<region>:<account>:stack/<name>/<id>
        stack_parts = export.get("ExportingStackId", "").split("/")
        console.print()
        console.print(f"[bright_cyan]Export Name:[/bright_cyan] [yellow]{escape(export['Name'])}[/yellow]")
        print_info(console, "Export Value", export.get("Value", ""))
        print_info(console, "Exporting Stack Name", stack_parts[1] if len(stack_parts) > 1 else "")
        print_info(console, "Exporting Stack ID", stack_parts[2] if len(stack_parts) > 2 else "")


def print_buckets(console: Console, listing: dict[str, Any]) -> None:
    owner = listing.get("Owner", {})
    print_info(console, "Buckets Owner", owner.get("DisplayName") or owner.get("ID", ""))
    for bucket in listing.get("Buckets", []):
        console.print()
        console.print(f"[bright_cyan]Bucket:[/bright_cyan] [yellow]{escape(bucket['Name'])}[/yellow]")
        print_info(console, "CreationDate", format_datetime(bucket.get("CreationDate")))


def print_certificates(console: Console, certificates: list[dict[str, Any]]) -> None:
    for cert in certificates:
        console.print()
        console.print(f"[bright_cyan]DomainName:[/bright_cyan] [yellow]{escape(cert['DomainName'])}[/yellow]")
        print_info(console, "CertificateArn", cert["CertificateArn"])


def print_log_groups(console: Console, log_groups: list[dict[str, Any]]) -> None:
    for group in log_groups:
        console.print()
        console.print(f"[bright_cyan]LogGroup:[/bright_cyan] [yellow]{escape(group['logGroupName'])}[/yellow]")
        if group.get("creationTime"):
            # creationTime is epoch milliseconds
            print_info(console, "CreationTime", format_datetime(datetime.fromtimestamp(group["creationTime"] / 1000)))
        print_info(console, "RetentionInDays", group.get("retentionInDays", "Never expire"))
        print_info(console, "StoredBytes", group.get("storedBytes", 0))


def print_account(console: Console, details: dict[str, Any]) -> None:
    if "UserName" in details:
        print_info(console, "UserName", details["UserName"])
    print_info(console, "UserId", details["UserId"])
    print_info(console, "AccountId", details["AccountId"])
    print_info(console, "Arn", details["Arn"])
    if "GroupList" in details:
        print_info(console, "GroupList", ", ".join(details["GroupList"]))
    if "AttachedManagedPolicies" in details:
        print_info(console, "AttachedManagedPolicies", ", ".join(details["AttachedManagedPolicies"]))
    if "CreateDate" in details:
        print_info(console, "CreateDate", format_datetime(details["CreateDate"]))
