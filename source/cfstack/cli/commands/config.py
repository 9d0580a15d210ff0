# ABOUTME: Config command for cfstack defaults
# ABOUTME: Shows or saves the default profile, region, bucket and poll interval

"""Config command - Show or change saved defaults."""

from cleo.commands.command import Command
from cleo.helpers import option
from rich import box
from rich.console import Console
from rich.table import Table

from cfstack.cli.utils.validators import validate_aws_region
from cfstack.config import Config


class ConfigCommand(Command):
    name = "config"
    description = "Show or update saved defaults"

    options = [
        option("profile", description="Default AWS profile", flag=False),
        option("region", description="Default AWS region", flag=False),
        option("bucket", description="Template bucket to use instead of cf-templates-<account>-<region>", flag=False),
        option("poll-interval", description="Seconds between stack event checks", flag=False),
    ]

    def handle(self) -> int:
        """Execute the config command."""
        console = Console()
        config = Config.load()

        updates = {
            "profile": self.option("profile"),
            "region": self.option("region"),
            "bucket": self.option("bucket"),
            "poll_interval": self.option("poll-interval"),
        }
        updates = {key: value for key, value in updates.items() if value is not None}

        if updates.get("region") and not validate_aws_region(updates["region"]):
            console.print(f"[red]Invalid region '{updates['region']}'[/red]")
            return 1
        if "poll_interval" in updates:
            try:
                updates["poll_interval"] = int(updates["poll_interval"])
            except ValueError:
                updates["poll_interval"] = 0
            if updates["poll_interval"] < 1:
                console.print("[red]--poll-interval must be a positive number of seconds[/red]")
                return 1

        if updates:
            for key, value in updates.items():
                setattr(config, key, value)
            config.save()
            console.print("[green]✓ Configuration saved[/green]")

        table = Table(box=box.SIMPLE)
        table.add_column("Setting", style="dim")
        table.add_column("Value")
        table.add_row("AWS Profile", config.profile)
        table.add_row("AWS Region", config.region)
        table.add_row("Bucket", config.bucket or "cf-templates-<account>-<region>")
        table.add_row("Poll Interval", f"{config.poll_interval}s")
        console.print(table)
        return 0
