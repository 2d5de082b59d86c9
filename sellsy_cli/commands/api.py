"""
CLI API Commands

Run a single Sellsy API call and print the answer.

Usage:
    sellsy call Document.getList --params '{"doctype": "invoice"}'
    sellsy infos --json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any, Callable

from sellsy.client import SellsyClient
from sellsy.schemas.errors import ApiError, RequestFailure
from sellsy_cli.config import CLIConfig


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_API_ERROR = 2


@dataclass
class CallSummary:
    """Outcome of one API call for CLI output."""
    method: str = ""
    ok: bool = True
    status: str = ""
    response: Any = None
    error: dict[str, Any] = field(default_factory=dict)
    request: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["error"]:
            del d["error"]
        if d["request"] is None:
            del d["request"]
        return d


def parse_params(raw: str | None) -> dict[str, Any]:
    """Parse the --params JSON object."""
    if not raw:
        return {}
    params = json.loads(raw)
    if not isinstance(params, dict):
        raise ValueError("--params must be a JSON object")
    return params


def create_client(config: CLIConfig) -> SellsyClient:
    """Build a client from the CLI configuration."""
    if not config.client.has_credentials:
        logger.warning("Sellsy credentials are incomplete; the API will reject the call")
    return SellsyClient.from_config(config.client)


def execute_call(
    client: SellsyClient,
    method: str,
    invoke: Callable[[], Any],
    debug: bool = False,
) -> tuple[CallSummary, int]:
    """Run invoke() and turn its outcome into a summary and an exit code."""
    summary = CallSummary(method=method)
    exit_code = EXIT_SUCCESS
    try:
        answer = invoke()
        if isinstance(answer, dict):
            summary.status = str(answer.get("status", ""))
            summary.response = answer.get("response", answer.get("result"))
        else:
            summary.response = answer
    except ApiError as e:
        summary.ok = False
        summary.status = "error"
        summary.error = e.error.to_dict()
        exit_code = EXIT_API_ERROR
    except RequestFailure as e:
        summary.ok = False
        summary.error = e.to_error_model().model_dump()
        exit_code = EXIT_RUNTIME_ERROR

    if debug:
        summary.request = client.last_request
    return summary, exit_code


def print_summary_human(summary: CallSummary) -> None:
    """Print summary in human-readable format."""
    print(f"method: {summary.method}")
    print(f"ok: {str(summary.ok).lower()}")
    if summary.status:
        print(f"status: {summary.status}")
    if summary.error:
        print("\nerror:")
        for key, value in summary.error.items():
            print(f"  {key}: {value}")
    if summary.response is not None:
        print("\nresponse:")
        print(json.dumps(summary.response, indent=2, ensure_ascii=False))
    if summary.request is not None:
        print("\nrequest:")
        print(json.dumps(summary.request, indent=2, ensure_ascii=False))


def print_summary_json(summary: CallSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))


def _run(args: Namespace, method: str, invoke: Callable[[SellsyClient], Any]) -> int:
    config: CLIConfig = getattr(args, "cli_config", None) or CLIConfig()
    output_json = args.json or config.default_output_format == "json"
    debug = getattr(args, "debug", False)

    with create_client(config) as client:
        summary, exit_code = execute_call(
            client, method, lambda: invoke(client), debug=debug
        )

    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)
    return exit_code


def call_cmd(args: Namespace) -> int:
    """
    Execute the call command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        params = parse_params(args.params)
    except ValueError as e:
        print(f"Invalid --params: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    return _run(args, args.method, lambda client: client.call(args.method, params))


def infos_cmd(args: Namespace) -> int:
    """Execute the infos command."""
    return _run(args, "Infos.getInfos", lambda client: client.get_infos())
