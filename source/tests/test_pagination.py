# ABOUTME: Tests for the best-effort page collector
# ABOUTME: Covers full concatenation, single pages and stopping at a failing page

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from cfstack.cli.utils.pagination import collect_pages, paginate_all


def pages(*batches, error=None):
    for batch in batches:
        yield {"Exports": batch}
    if error:
        raise error


def throttled():
    return ClientError({"Error": {"Code": "Throttling", "Message": "Rate exceeded"}}, "ListExports")


class TestCollectPages:
    def test_single_page(self):
        result = collect_pages(pages(["a", "b"]), "Exports")

        assert result.items == ["a", "b"]
        assert result.complete

    @pytest.mark.parametrize("page_count", [1, 2, 5])
    def test_concatenates_pages_in_order(self, page_count):
        batches = [[f"p{n}-{i}" for i in range(3)] for n in range(page_count)]

        result = collect_pages(pages(*batches), "Exports")

        assert result.items == [item for batch in batches for item in batch]
        assert result.errors == []

    def test_failing_page_returns_earlier_pages(self):
        error = throttled()

        result = collect_pages(pages(["a"], ["b", "c"], error=error), "Exports")

        assert result.items == ["a", "b", "c"]
        assert result.errors == [error]
        assert not result.complete

    def test_failing_first_page_is_empty_not_raised(self):
        result = collect_pages(pages(error=throttled()), "Exports")

        assert result.items == []
        assert len(result.errors) == 1

    def test_transport_errors_are_fail_soft(self):
        error = EndpointConnectionError(endpoint_url="https://cloudformation.us-west-2.amazonaws.com")

        result = collect_pages(pages(["a"], error=error), "Exports")

        assert result.items == ["a"]
        assert result.errors == [error]

    def test_missing_result_key_counts_as_empty_page(self):
        result = collect_pages(iter([{"NextToken": "x"}, {"Exports": ["a"]}]), "Exports")
        assert result.items == ["a"]


class TestPaginateAll:
    def test_binds_query_parameters(self):
        client = MagicMock()
        client.get_paginator.return_value.paginate.return_value = iter([{"StackEvents": ["e"]}])

        result = paginate_all(client, "describe_stack_events", "StackEvents", StackName="web-app")

        client.get_paginator.assert_called_once_with("describe_stack_events")
        client.get_paginator.return_value.paginate.assert_called_once_with(StackName="web-app")
        assert result.items == ["e"]
