"""Query parameter records and typed result objects."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Self


STEP_FORMATS: dict[str, str] = {
    "SECOND": "%Y-%m-%d %H%M%S",
    "MINUTE": "%Y-%m-%d %H%M",
    "HOUR": "%Y-%m-%d %H",
    "DAY": "%Y-%m-%d",
}


def format_time(moment: datetime, step: str = "MINUTE") -> str:
    """Render a datetime the way the backend expects duration bounds."""
    try:
        return moment.strftime(STEP_FORMATS[step])
    except KeyError:
        raise ValueError(f"Unsupported duration step: {step}") from None


def placeholder(name: str, default: Any = ...) -> Any:
    """Declare a parameter field bound to a differently named placeholder."""
    if default is ...:
        return field(metadata={"placeholder": name})
    return field(default=default, metadata={"placeholder": name})


@dataclass(frozen=True, kw_only=True)
class QueryParams:
    """Base record for the values substituted into a template."""

    def bind(self) -> dict[str, str]:
        """Map every field onto its placeholder name, rendered as a string."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool):
                value = str(value).lower()
            values[f.metadata.get("placeholder", f.name)] = str(value)
        return values


@dataclass(frozen=True, kw_only=True)
class DurationQuery(QueryParams):
    start: str
    end: str
    step: str = "MINUTE"

    @classmethod
    def last(
        cls,
        minutes: int = 15,
        step: str = "MINUTE",
        now: Optional[datetime] = None,
        **kwargs,
    ) -> Self:
        """Build a query covering the window of ``minutes`` that ends at ``now``."""
        end = now or datetime.now(timezone.utc)
        start = end - timedelta(minutes=minutes)
        return cls(
            start=format_time(start, step),
            end=format_time(end, step),
            step=step,
            **kwargs,
        )


@dataclass(frozen=True, kw_only=True)
class TracesQuery(DurationQuery):
    trace_state: str = placeholder("traceState", "ALL")
    page_num: str = placeholder("pageNum", "1")
    page_size: str = placeholder("pageSize", "15")
    need_total: str = placeholder("needTotal", "true")
    query_order: str = placeholder("queryOrder", "BY_DURATION")


@dataclass(frozen=True, kw_only=True)
class ServicesQuery(DurationQuery):
    pass


@dataclass(frozen=True, kw_only=True)
class TopoQuery(DurationQuery):
    pass


@dataclass(frozen=True, kw_only=True)
class InstancesQuery(DurationQuery):
    service_id: str = placeholder("serviceId")


@dataclass(frozen=True, kw_only=True)
class EndpointQuery(QueryParams):
    service_id: str = placeholder("serviceId")


@dataclass(frozen=True, kw_only=True)
class ServiceInstanceTopologyQuery(DurationQuery):
    client_service_id: str = placeholder("clientServiceId")
    server_service_id: str = placeholder("serverServiceId")


@dataclass(frozen=True, kw_only=True)
class MetricsQuery(DurationQuery):
    metrics_name: str = placeholder("metricsName")
    id: str


@dataclass(frozen=True, kw_only=True)
class MultiLinearMetricsQuery(MetricsQuery):
    num_of_linear: str = placeholder("numOfLinear")


@dataclass(frozen=True, kw_only=True)
class ReadMetricsQuery(DurationQuery):
    metrics_name: str = placeholder("metricsName")
    service_name: str = placeholder("serviceName")
    instance_name: str = placeholder("instanceName")


# Result objects


@dataclass(frozen=True)
class Trace:
    """One trace segment from the basic trace list."""

    key: str
    endpoint_names: list[str]
    duration: int
    start: str
    is_error: bool
    trace_ids: list[str]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from one entry of ``traces.data``."""
        return cls(
            key=raw["key"],
            endpoint_names=list(raw.get("endpointNames") or []),
            duration=int(raw["duration"]),
            start=str(raw["start"]),
            is_error=bool(raw.get("isError", False)),
            trace_ids=list(raw.get("traceIds") or []),
        )


@dataclass(frozen=True)
class Service:
    """A service known to the backend."""

    key: str
    label: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a ``{key, label}`` object."""
        return cls(key=raw["key"], label=raw["label"])


@dataclass(frozen=True)
class Endpoint:
    """An endpoint of a service."""

    key: str
    label: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a ``{key, label}`` object."""
        return cls(key=raw["key"], label=raw["label"])


@dataclass(frozen=True)
class Instance:
    """A service instance with its reported attributes flattened to a dict."""

    key: str
    label: str
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Flatten the ``attributes`` name/value list into a dict."""
        attributes = {
            attr["name"]: attr["value"] for attr in raw.get("attributes") or []
        }
        return cls(key=raw["key"], label=raw["label"], attributes=attributes)


@dataclass(frozen=True)
class Node:
    """A topology node; service fields are only set for instance topologies."""

    id: str
    name: str
    type: Optional[str]
    is_real: bool
    service_id: Optional[str] = None
    service_name: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a node object; ``type`` may be null for virtual nodes."""
        return cls(
            id=raw["id"],
            name=raw["name"],
            type=raw.get("type"),
            is_real=bool(raw.get("isReal", False)),
            service_id=raw.get("serviceId"),
            service_name=raw.get("serviceName"),
        )


@dataclass(frozen=True)
class Call:
    """A directed call between two topology nodes."""

    id: str
    source: str
    target: str
    detect_points: list[str]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a call object; ``detectPoints`` defaults to empty."""
        return cls(
            id=raw["id"],
            source=raw["source"],
            target=raw["target"],
            detect_points=list(raw.get("detectPoints") or []),
        )


@dataclass(frozen=True)
class Topology:
    """A topology graph of nodes and the calls between them."""

    nodes: list[Node]
    calls: list[Call]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Missing ``nodes`` or ``calls`` become empty lists."""
        return cls(
            nodes=[Node.from_dict(n) for n in raw.get("nodes") or []],
            calls=[Call.from_dict(c) for c in raw.get("calls") or []],
        )


@dataclass(frozen=True)
class KV:
    """One point of a metrics series."""

    id: str
    value: int

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """``value`` may arrive as a number or a numeric string."""
        return cls(id=raw["id"], value=int(raw["value"]))


@dataclass(frozen=True)
class Metrics:
    """A linear metrics series."""

    values: list[KV]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a ``{values: [...]}`` object."""
        return cls(values=[KV.from_dict(v) for v in raw["values"]])


@dataclass(frozen=True)
class ReadMetrics:
    """A metrics series read by entity names, with its label if any."""

    label: Optional[str]
    values: Metrics

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self:
        """Build from a ``{label, values: {values: [...]}}`` object."""
        return cls(label=raw.get("label"), values=Metrics.from_dict(raw["values"]))
