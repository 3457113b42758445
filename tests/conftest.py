"""Shared fixtures for the query client tests."""

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests

from query_client import models
from query_client.config import Config
from query_client.graphql_client import GraphQLClient
from query_client.query_client import QueryClient

ENDPOINT = "http://oap:12800/graphql"
START = "2024-09-01 1200"
END = "2024-09-01 1215"

SAMPLE_PARAMS: dict[str, models.QueryParams] = {
    "traces": models.TracesQuery(start=START, end=END),
    "services": models.ServicesQuery(start=START, end=END),
    "instances": models.InstancesQuery(
        start=START, end=END, service_id="c2VydmljZS1h.1"
    ),
    "endpoints": models.EndpointQuery(service_id="c2VydmljZS1h.1"),
    "topo": models.TopoQuery(start=START, end=END),
    "service_instance_topo": models.ServiceInstanceTopologyQuery(
        start=START,
        end=END,
        client_service_id="c2VydmljZS1h.1",
        server_service_id="c2VydmljZS1i.1",
    ),
    "metrics": models.MetricsQuery(
        start=START, end=END, metrics_name="service_sla", id="c2VydmljZS1h.1"
    ),
    "multiple_linear_metrics": models.MultiLinearMetricsQuery(
        start=START,
        end=END,
        metrics_name="service_percentile",
        id="c2VydmljZS1h.1",
        num_of_linear="5",
    ),
    "read_metrics": models.ReadMetricsQuery(
        start=START,
        end=END,
        metrics_name="meter_jvm_memory_used",
        service_name="service-a",
        instance_name="instance-a",
    ),
    "read_labeled_metrics": models.ReadMetricsQuery(
        start=START,
        end=END,
        metrics_name="meter_jvm_thread_count",
        service_name="service-a",
        instance_name="instance-a",
    ),
}


def make_response(
    status: int = 200, payload: Any = None, text: Optional[str] = None
) -> MagicMock:
    """Build a stand-in for a requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.text = text if text is not None else str(payload)
    if text is not None and payload is None:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    """Fixture for mocking the shared HTTP session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def graphql_client(mock_session: MagicMock) -> GraphQLClient:
    """Fixture for a GraphQLClient sending through the mocked session."""
    return GraphQLClient(ENDPOINT, session=mock_session)


@pytest.fixture
def query_client(graphql_client: GraphQLClient) -> QueryClient:
    """Fixture for a QueryClient using the bundled templates."""
    return QueryClient(Config(endpoint=ENDPOINT), graphql_client=graphql_client)
