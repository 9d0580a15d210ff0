# ABOUTME: Custom exception classes for cfstack commands
# ABOUTME: Each error kind carries the process exit code the CLI returns for it

"""Custom exceptions for stack, template and storage operations."""


class CfstackError(Exception):
    """Base exception for all cfstack operations."""

    exit_code = 1

    def __init__(self, message: str, stack_name: str = None):
        self.message = message
        self.stack_name = stack_name
        super().__init__(self.message)


class TemplateError(CfstackError):
    """Raised when a local template path is missing or invalid."""

    exit_code = 2


class StackError(CfstackError):
    """Raised when a required stack is absent or a stack argument is missing."""

    exit_code = 3


class ParameterError(StackError):
    """Raised when a --params string cannot be parsed."""


class UploadError(CfstackError):
    """Raised when writing templates to the bucket fails."""

    exit_code = 4


class AccountError(CfstackError):
    """Raised when account details cannot be queried."""

    exit_code = 5


class CertificateError(CfstackError):
    """Raised when certificates cannot be listed."""

    exit_code = 6


class BucketError(CfstackError):
    """Raised when a referenced bucket is absent or cannot be removed."""

    exit_code = 7


class StackOperationError(CfstackError):
    """Raised when a create, update or delete does not reach a successful terminal state."""

    exit_code = 8

    def __init__(self, message: str, operation: str = None, stack_name: str = None):
        super().__init__(message, stack_name)
        self.operation = operation


class QueryError(CfstackError):
    """Raised when a listing returned nothing but errors."""

    exit_code = 9
