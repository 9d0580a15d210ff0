# ABOUTME: Upload command for template files and directories
# ABOUTME: Ensures the template bucket exists and writes the templates to it

"""Upload command - Put templates in the deployment bucket."""

from cleo.helpers import argument, option

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.cf_exceptions import UploadError
from cfstack.cli.utils.display import print_error, print_info
from cfstack.cli.utils.validators import directory_exists, template_exists


class UploadCommand(AwsCommand):
    name = "upload"
    description = "Upload a template, or a directory of templates, to the bucket"

    arguments = [argument("template", description="Template file or directory", optional=True)]

    options = [
        *COMMON_OPTIONS,
        option("dir", description="Upload every .yml/.yaml file in a directory", flag=True),
    ]

    def perform(self) -> int:
        """Execute the upload command."""
        template = self.argument("template")
        self.show_target()

        if self.option("dir"):
            print_info(self.console, "Template Directory", template)
            path = directory_exists(template)
        else:
            print_info(self.console, "Template", template)
            path = template_exists(template)

        bucket = self.resolve_bucket()
        print_info(self.console, "Bucket", bucket)

        result = self.template_store(bucket).upload(path)
        if not result.success:
            for name, error in sorted(result.errors.items()):
                print_error(self.console, f"{name}: {error}")
            total = len(result.errors) + len(result.uploaded)
            raise UploadError(f"{len(result.errors)} of {total} uploads failed")

        if not result.uploaded:
            self.console.print("[yellow]No .yml or .yaml templates found[/yellow]")
        return 0
