# SPDX-License-Identifier: MIT

import json
import time
import unittest
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qsl

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from oauthcord import Client, TransportResponse

console = Console()

API = "https://discord.com/api/v10"


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))

    def form(self) -> Dict[str, str]:
        return dict(parse_qsl(self.body.decode("utf-8"), keep_blank_values=True))


class SpyTransport:
    """Records every request and answers from a queue of ``(status, body)`` pairs.

    Bodies given as dicts or lists are JSON encoded. An exception in the
    queue is raised instead of answering.
    """

    def __init__(self, *responses: Union[Tuple[int, Any], BaseException]) -> None:
        self.calls: List[RecordedCall] = []
        self.responses = list(responses)
        self.closed = False

    async def perform(self, method, url, headers, body=None):
        self.calls.append(RecordedCall(method, url, dict(headers), body))
        if not self.responses:
            return TransportResponse(200, b"{}", {"Content-Type": "application/json"}, 0.01)

        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        status, payload = response
        if isinstance(payload, (dict, list)):
            payload = json.dumps(payload).encode("utf-8")
        return TransportResponse(status, payload, {"Content-Type": "application/json"}, 0.01)

    async def close(self):
        self.closed = True

    @property
    def last(self) -> RecordedCall:
        return self.calls[-1]


def make_client(*responses, **kwargs) -> Tuple[Client, SpyTransport]:
    transport = SpyTransport(*responses)
    client = Client(
        1234567890,
        "s3cr3t",
        "https://example.com/callback",
        "bot-token",
        transport=transport,
        **kwargs,
    )
    return client, transport


class OAuthcordTestCase(unittest.IsolatedAsyncioTestCase):
    """Announces each test and keeps a timing log for :func:`run_suite`."""

    results: List[Dict[str, Any]] = []

    def setUp(self):
        self._started = time.time()
        console.print(Panel(Text(f"Running: {self._testMethodName}", style="bold cyan")))

    def tearDown(self):
        self.results.append({
            "test_case": f"{self.__class__.__name__}.{self._testMethodName}",
            "execution_time": time.time() - self._started,
        })


def run_suite(*cases: type) -> bool:
    """Run the given test cases and print a summary table."""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite(loader.loadTestsFromTestCase(case) for case in cases)
    result = unittest.TextTestRunner(verbosity=0).run(suite)

    table = Table(title="Test Results")
    table.add_column("Test Case", style="cyan")
    table.add_column("Time (ms)", justify="right")
    for entry in OAuthcordTestCase.results:
        table.add_row(entry["test_case"], f"{entry['execution_time'] * 1000:.2f}")
    console.print(table)
    console.print(Panel(Text(
        f"Ran {result.testsRun}, failures {len(result.failures)}, errors {len(result.errors)}",
        style="bold green" if result.wasSuccessful() else "bold red",
    )))
    return result.wasSuccessful()
