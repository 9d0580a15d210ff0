# ABOUTME: cfstack - Deploy and inspect CloudFormation stacks from local templates
# ABOUTME: Main package for the stack deployment command-line tool

"""cfstack - CloudFormation deployment tool."""

__version__ = "1.0.0"
__all__ = ["cli", "config"]
