"""Tests for the command-line entry point."""

import json
from unittest.mock import patch

import pytest

import main
from query_client import models
from query_client.errors import UnexpectedStatus
from query_client.operations import OPERATIONS
from query_client.query_client import QueryClient


def test_build_params_accepts_field_and_placeholder_names() -> None:
    params = main.build_params(
        OPERATIONS["instances"],
        ["start=2024-09-01 1200", "end=2024-09-01 1215", "serviceId=s1"],
    )

    assert params == models.InstancesQuery(
        start="2024-09-01 1200", end="2024-09-01 1215", service_id="s1"
    )


def test_build_params_fills_window_from_last() -> None:
    params = main.build_params(OPERATIONS["services"], [], last=30)

    assert isinstance(params, models.ServicesQuery)
    assert params.start < params.end


def test_build_params_rejects_bare_words() -> None:
    with pytest.raises(ValueError):
        main.build_params(OPERATIONS["endpoints"], ["service_id"])


def test_main_prints_result_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    # GIVEN
    services = [models.Service(key="1", label="svc-a")]

    # WHEN
    with patch.object(QueryClient, "run", return_value=services) as mock_run:
        main.main(["--url", "http://oap/graphql", "services", "--last", "15"])

    # THEN
    mock_run.assert_called_once()
    assert json.loads(capsys.readouterr().out) == [{"key": "1", "label": "svc-a"}]


def test_main_exits_on_query_error() -> None:
    with patch.object(QueryClient, "run", side_effect=UnexpectedStatus(500, "")):
        with pytest.raises(SystemExit) as exc_info:
            main.main(["endpoints", "service_id=s1"])

    assert exc_info.value.code == 1
