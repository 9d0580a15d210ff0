# ABOUTME: Best-effort "fetch every page" helper for boto3 list and describe calls
# ABOUTME: Stops at the first failing page and reports the error alongside what was fetched

"""Pagination helpers for bulk CloudFormation, ACM and logs queries."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Items gathered across pages plus any error that cut the walk short."""

    items: list[Any] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every page was fetched."""
        return not self.errors


def collect_pages(pages: Iterable[dict[str, Any]], result_key: str) -> PageResult:
    """
    Concatenate ``result_key`` from each page until the pages run out.

    A page that fails to load ends the walk: the items gathered so far are
    returned and the error is recorded on the result instead of raised.
    Callers must treat an incomplete result as possibly missing items.

    Args:
        pages: Page iterable, usually a boto3 PageIterator
        result_key: Key of the item list inside each page

    Returns:
        PageResult with the concatenated items and any fetch error
    """
    result = PageResult()
    try:
        for page in pages:
            result.items.extend(page.get(result_key) or [])
    except (ClientError, BotoCoreError) as e:
        logger.debug("Stopped paginating %s after %d items: %s", result_key, len(result.items), e)
        result.errors.append(e)
    return result


def paginate_all(client, operation_name: str, result_key: str, **params) -> PageResult:
    """Run a boto3 paginator bound to ``params`` and collect every page."""
    paginator = client.get_paginator(operation_name)
    return collect_pages(paginator.paginate(**params), result_key)
