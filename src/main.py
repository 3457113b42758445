#!/usr/bin/env python3.12
"""
Query Client - Main Application

Runs one named backend query from the command line and prints the typed
result as JSON. Useful for checking a backend by hand before a test run.
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any

from query_client.config import Config
from query_client.errors import QueryClientError
from query_client.models import DurationQuery
from query_client.operations import OPERATIONS, Operation
from query_client.query_client import QueryClient


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Query Client",
        epilog="Parameters are given as key=value, e.g. service_id=c2VydmljZQ==.1",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument("--url", help="Full GraphQL endpoint URL (overrides host/port)")
    parser.add_argument("--host", default="127.0.0.1", help="Backend host")
    parser.add_argument("--port", type=int, default=12800, help="Backend port")
    parser.add_argument(
        "--last",
        type=int,
        metavar="MINUTES",
        help="Fill start/end with the window of MINUTES ending now",
    )
    parser.add_argument("operation", choices=sorted(OPERATIONS), help="Query to run")
    parser.add_argument("params", nargs="*", metavar="key=value", help="Query parameters")

    return parser.parse_args(argv)


def build_params(operation: Operation, pairs: list[str], last: int | None = None):
    """Build the operation's parameter record from key=value pairs."""
    by_placeholder = {
        f.metadata.get("placeholder", f.name): f.name
        for f in dataclasses.fields(operation.params)
    }
    kwargs: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got: {pair}")
        kwargs[by_placeholder.get(key, key)] = value

    if last is not None and issubclass(operation.params, DurationQuery):
        return operation.params.last(minutes=last, **kwargs)
    return operation.params(**kwargs)


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    return value


def main(argv: list[str] | None = None) -> None:
    """Main function to run the Query Client."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = Config(host=args.host, port=args.port, endpoint=args.url)
    client = QueryClient(config)
    operation = OPERATIONS[args.operation]
    logger.info(f"Running {operation.name} against {config.GRAPHQL_ENDPOINT}")

    try:
        params = build_params(operation, args.params, args.last)
        result = client.run(operation, params)
        print(json.dumps(to_jsonable(result), indent=2, default=str))
    except (QueryClientError, TypeError, ValueError) as e:
        logger.error(f"{operation.name} failed: {str(e)}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"An error occurred: {str(e)}")
        sys.exit(1)
    finally:
        client.client.close()


if __name__ == "__main__":
    main()
