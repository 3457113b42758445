"""The fixed set of backend queries, each described as plain configuration."""

from dataclasses import dataclass
from typing import Any, Callable

from query_client import models


@dataclass(frozen=True)
class Operation:
    """
    One backend query.

    Attributes:
        name: Operation name used by callers and the CLI.
        template: File name of the query template.
        params: Parameter record type accepted by the operation.
        path: Keys leading from ``data`` to the payload.
        parse: Converts the raw payload into the typed result.
    """

    name: str
    template: str
    params: type[models.QueryParams]
    path: tuple[str, ...]
    parse: Callable[[Any], Any]


def many(parse: Callable[[Any], Any]) -> Callable[[Any], list[Any]]:
    """Lift an item parser to a parser of lists."""

    def parse_list(raw: Any) -> list[Any]:
        if not isinstance(raw, list):
            raise TypeError(f"expected a list, got {type(raw).__name__}")
        return [parse(item) for item in raw]

    return parse_list


TRACES = Operation(
    "traces",
    "traces.gql",
    models.TracesQuery,
    ("traces", "data"),
    many(models.Trace.from_dict),
)
SERVICES = Operation(
    "services",
    "services.gql",
    models.ServicesQuery,
    ("services",),
    many(models.Service.from_dict),
)
INSTANCES = Operation(
    "instances",
    "instances.gql",
    models.InstancesQuery,
    ("instances",),
    many(models.Instance.from_dict),
)
ENDPOINTS = Operation(
    "endpoints",
    "endpoints.gql",
    models.EndpointQuery,
    ("endpoints",),
    many(models.Endpoint.from_dict),
)
TOPO = Operation(
    "topo",
    "topo.gql",
    models.TopoQuery,
    ("topo",),
    models.Topology.from_dict,
)
SERVICE_INSTANCE_TOPO = Operation(
    "service_instance_topo",
    "instanceTopo.gql",
    models.ServiceInstanceTopologyQuery,
    ("topo",),
    models.Topology.from_dict,
)
METRICS = Operation(
    "metrics",
    "metrics.gql",
    models.MetricsQuery,
    ("metrics",),
    models.Metrics.from_dict,
)
MULTIPLE_LINEAR_METRICS = Operation(
    "multiple_linear_metrics",
    "metrics-multiLines.gql",
    models.MultiLinearMetricsQuery,
    ("metrics",),
    many(models.Metrics.from_dict),
)
READ_METRICS = Operation(
    "read_metrics",
    "read-metrics.gql",
    models.ReadMetricsQuery,
    ("readMetricsValues",),
    models.ReadMetrics.from_dict,
)
READ_LABELED_METRICS = Operation(
    "read_labeled_metrics",
    "read-labeled-metrics.gql",
    models.ReadMetricsQuery,
    ("readLabeledMetricsValues",),
    many(models.ReadMetrics.from_dict),
)

OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in (
        TRACES,
        SERVICES,
        INSTANCES,
        ENDPOINTS,
        TOPO,
        SERVICE_INSTANCE_TOPO,
        METRICS,
        MULTIPLE_LINEAR_METRICS,
        READ_METRICS,
        READ_LABELED_METRICS,
    )
}
