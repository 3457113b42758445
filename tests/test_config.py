"""Tests for the Config class."""

import pytest

from query_client.config import Config


def test_defaults() -> None:
    config = Config()

    assert config.GRAPHQL_ENDPOINT == "http://127.0.0.1:12800/graphql"
    assert config.TEMPLATE_DIR is None
    assert config.REQUEST_TIMEOUT == 30.0


@pytest.mark.parametrize(
    "overrides, expected",
    [
        ({"PORT": 9999}, "http://127.0.0.1:9999/graphql"),
        ({"HOST": "oap"}, "http://oap:12800/graphql"),
        ({"GRAPHQL_PATH": "/gql"}, "http://127.0.0.1:12800/gql"),
        ({"host": "oap", "port": 11800}, "http://oap:11800/graphql"),
    ],
)
def test_endpoint_follows_overrides(overrides: dict, expected: str) -> None:
    assert Config(**overrides).GRAPHQL_ENDPOINT == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"endpoint": "https://oap.example/graphql", "PORT": 9999},
        {"GRAPHQL_ENDPOINT": "https://oap.example/graphql", "HOST": "other"},
    ],
)
def test_explicit_endpoint_wins(overrides: dict) -> None:
    assert Config(**overrides).GRAPHQL_ENDPOINT == "https://oap.example/graphql"


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(AttributeError):
        Config(TIMEOUT=5)
