"""Configuration module for the query client."""

from typing import Optional


class Config:
    """
    Configuration class for the query client.

    Upper-case keyword overrides replace the defaults below. The endpoint is
    derived from HOST, PORT and GRAPHQL_PATH after overrides are applied,
    unless ``endpoint`` or ``GRAPHQL_ENDPOINT`` is given.
    """

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 12800,
        endpoint: Optional[str] = None,
        **overrides,
    ):
        self.HOST = host
        self.PORT = port
        self.GRAPHQL_PATH = "/graphql"
        self.GRAPHQL_ENDPOINT: Optional[str] = endpoint
        self.TEMPLATE_DIR: Optional[str] = None
        self.COMMENT_MARKER = "#"
        self.REQUEST_TIMEOUT = 30.0
        self.POOL_SIZE = 10

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown configuration option: {name}")
            setattr(self, name, value)

        if not self.GRAPHQL_ENDPOINT:
            self.GRAPHQL_ENDPOINT = (
                f"http://{self.HOST}:{self.PORT}{self.GRAPHQL_PATH}"
            )
