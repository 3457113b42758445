"""Typed entry points over the template-and-unwrap query pipeline."""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from query_client import models
from query_client import operations as ops
from query_client.config import Config
from query_client.errors import MalformedResponse, QueryClientError, TemplateNotFound
from query_client.graphql_client import GraphQLClient
from query_client.operations import Operation
from query_client.templates import TemplateResolver

T = TypeVar("T")


@dataclass(frozen=True)
class QueryOutcome(Generic[T]):
    """Either the typed result of a call or the error that ended it."""

    value: Optional[T] = None
    error: Optional[QueryClientError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failure_kind(self) -> Optional[str]:
        """One of ``transport``, ``decode``, ``missing_payload`` or ``template``."""
        return None if self.error is None else self.error.kind

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


class QueryClient:
    """Client exposing one method per backend query."""

    def __init__(
        self,
        config: Optional[Config] = None,
        graphql_client: Optional[GraphQLClient] = None,
        resolver: Optional[TemplateResolver] = None,
    ):
        self.config = config or Config()
        self.client = graphql_client or GraphQLClient(
            self.config.GRAPHQL_ENDPOINT,
            timeout=self.config.REQUEST_TIMEOUT,
            pool_size=self.config.POOL_SIZE,
        )
        self.resolver = resolver or TemplateResolver(
            self.config.TEMPLATE_DIR, self.config.COMMENT_MARKER
        )
        self.logger = logging.getLogger(__name__)

    @classmethod
    def for_host(cls, host: str, port: int) -> "QueryClient":
        return cls(Config(host=host, port=port))

    @classmethod
    def for_url(cls, endpoint: str) -> "QueryClient":
        return cls(Config(endpoint=endpoint))

    @property
    def endpoint(self) -> str:
        return self.client.endpoint

    def resolve(self, operation: Operation | str, params: models.QueryParams) -> str:
        """Produce the literal request body for ``operation``."""
        operation = self._lookup(operation)
        return self.resolver.resolve(
            operation.template, params.bind(), operation_name=operation.name
        )

    def run(self, operation: Operation | str, params: models.QueryParams) -> Any:
        """Resolve, execute and unwrap one operation, raising on any failure."""
        operation = self._lookup(operation)
        if not isinstance(params, operation.params):
            raise TypeError(
                f"{operation.name} expects {operation.params.__name__}, "
                f"got {type(params).__name__}"
            )

        body = self.resolve(operation, params)
        envelope = self.client.execute(body)
        payload = self.client.extract(envelope, operation.path)
        try:
            return operation.parse(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            path = ".".join(["data", *operation.path])
            self.logger.error(f"Could not decode {path} for {operation.name}: {e!r}")
            raise MalformedResponse(f"{path}: {e!r}", payload) from e

    def attempt(
        self, operation: Operation | str, params: models.QueryParams
    ) -> QueryOutcome[Any]:
        """Like ``run``, but report query failures as a ``QueryOutcome``."""
        try:
            return QueryOutcome(value=self.run(operation, params))
        except QueryClientError as e:
            return QueryOutcome(error=e)

    @staticmethod
    def _lookup(operation: Operation | str) -> Operation:
        if isinstance(operation, Operation):
            return operation
        try:
            return ops.OPERATIONS[operation]
        except KeyError:
            raise TemplateNotFound(str(operation)) from None

    # Entry points

    def traces(self, query: models.TracesQuery) -> list[models.Trace]:
        """Fetch the basic trace list for a time window."""
        return self.run(ops.TRACES, query)

    def services(self, query: models.ServicesQuery) -> list[models.Service]:
        """Fetch all services reporting within a time window."""
        return self.run(ops.SERVICES, query)

    def instances(self, query: models.InstancesQuery) -> list[models.Instance]:
        """Fetch the instances of one service."""
        return self.run(ops.INSTANCES, query)

    def endpoints(self, query: models.EndpointQuery) -> list[models.Endpoint]:
        """Fetch the endpoints of one service."""
        return self.run(ops.ENDPOINTS, query)

    def topo(self, query: models.TopoQuery) -> models.Topology:
        """Fetch the global service topology."""
        return self.run(ops.TOPO, query)

    def service_instance_topo(
        self, query: models.ServiceInstanceTopologyQuery
    ) -> models.Topology:
        """Fetch the instance topology between a client and a server service."""
        return self.run(ops.SERVICE_INSTANCE_TOPO, query)

    def metrics(self, query: models.MetricsQuery) -> models.Metrics:
        """Fetch one linear metrics series."""
        return self.run(ops.METRICS, query)

    def multiple_linear_metrics(
        self, query: models.MetricsQuery, num_of_linear: str
    ) -> list[models.Metrics]:
        """Fetch ``num_of_linear`` metrics series, e.g. one per percentile."""
        if not isinstance(query, models.MultiLinearMetricsQuery):
            query = models.MultiLinearMetricsQuery(
                **dataclasses.asdict(query), num_of_linear=str(num_of_linear)
            )
        else:
            query = dataclasses.replace(query, num_of_linear=str(num_of_linear))
        return self.run(ops.MULTIPLE_LINEAR_METRICS, query)

    def read_metrics(self, query: models.ReadMetricsQuery) -> models.ReadMetrics:
        """Read the metrics values of a service instance by names."""
        return self.run(ops.READ_METRICS, query)

    def read_labeled_metrics(
        self, query: models.ReadMetricsQuery
    ) -> list[models.ReadMetrics]:
        """Read labeled metrics of a service instance, one series per label."""
        return self.run(ops.READ_LABELED_METRICS, query)
