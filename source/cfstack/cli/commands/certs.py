# ABOUTME: Certs command listing ACM certificates
# ABOUTME: Always queries us-east-1, where CloudFront certificates live

"""Certs command - List SSL certificates."""

from cfstack.cli.commands.base import COMMON_OPTIONS, AwsCommand
from cfstack.cli.utils.aws import CERTIFICATE_REGION, list_certificates
from cfstack.cli.utils.cf_exceptions import CertificateError
from cfstack.cli.utils.display import print_certificates, print_incomplete


class CertsCommand(AwsCommand):
    name = "certs"
    description = "List SSL certificates"

    options = [*COMMON_OPTIONS]

    def perform(self) -> int:
        self.show_target(region=CERTIFICATE_REGION)
        self.console.print(f"[dim italic]certs are in {CERTIFICATE_REGION}[/dim italic]")

        result = list_certificates(self.session)
        self.require_items(result, "certificates", CertificateError)
        print_certificates(self.console, result.items)
        print_incomplete(self.console, result, "certificates")
        return 0
