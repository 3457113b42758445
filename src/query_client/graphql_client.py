"""GraphQL client module for querying the observability backend."""

import logging
from typing import Any, Dict, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter

from query_client.errors import MalformedResponse, MissingPayload, UnexpectedStatus


class GraphQLClient:
    """GraphQL client posting literal query documents to a fixed endpoint."""

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = 30.0,
        pool_size: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)
        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_size)
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        self.session = session

    def close(self) -> None:
        self.session.close()

    def execute(self, query: str) -> Dict[str, Any]:
        """
        Execute a GraphQL query and return the decoded response envelope.

        Args:
            query (str): The literal GraphQL document.

        Returns:
            Dict[str, Any]: The whole JSON envelope, ``data`` included.

        Raises:
            UnexpectedStatus: The backend answered with a status other than 200.
            MalformedResponse: The body is not a JSON object.
        """
        self.logger.info(f"Executing GraphQL query: {query[:50]}...")
        self.logger.debug(f"Query: {query}")
        try:
            response = self.session.post(
                self.endpoint, json={"query": query}, timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.exception(f"Error executing GraphQL query: {str(e)}")
            raise

        if response.status_code != 200:
            self.logger.error(
                f"Response status != 200, actual: {response.status_code}, "
                f"body: {response.text[:200]}"
            )
            raise UnexpectedStatus(response.status_code, response.text)

        try:
            envelope = response.json()
        except ValueError as e:
            self.logger.error(f"Response body is not JSON: {str(e)}")
            raise MalformedResponse(f"body is not JSON ({e})", response.text) from e

        if not isinstance(envelope, dict):
            raise MalformedResponse(
                f"expected a JSON object, got {type(envelope).__name__}", envelope
            )

        self.logger.debug(f"Query result: {envelope}")
        return envelope

    @staticmethod
    def extract(envelope: Dict[str, Any], path: Sequence[str]) -> Any:
        """
        Walk ``data`` along ``path`` and return the value found there.

        A null or absent step raises MissingPayload; a step that is not a
        JSON object raises MalformedResponse.
        """
        errors = envelope.get("errors")
        current: Any = envelope.get("data")
        if current is None:
            raise MissingPayload((), errors)

        for depth, key in enumerate(path):
            if not isinstance(current, dict):
                walked = ".".join(["data", *path[:depth]])
                raise MalformedResponse(
                    f"{walked} is {type(current).__name__}, not an object", envelope
                )
            current = current.get(key)
            if current is None:
                raise MissingPayload(path[: depth + 1], errors)

        return current
