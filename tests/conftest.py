"""Shared test fixtures and sample log data."""

from __future__ import annotations

import pytest

from httop.aggregator import Aggregator
from httop.controls import SortController
from httop.models import Rejection
from httop.multiplexer import InputMultiplexer
from httop.parser import parse_line


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def aggregator(clock):
    return Aggregator(clock)


@pytest.fixture
def controller():
    return SortController()


@pytest.fixture
def multiplexer(aggregator, controller):
    return InputMultiplexer(aggregator, controller)


def record(name: str):
    """Parse one of the sample lines, failing loudly if it is rejected."""
    result = parse_line(SAMPLE_LINES[name])
    assert not isinstance(result, Rejection), f"{name} was rejected: {result}"
    return result


SCENARIO_LINES = [
    '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 100 "-" "UA1" 0.01',
    '10.0.0.1 - - [01/Jan/2024:00:00:01] "GET /a HTTP/1.1" 200 150 "-" "UA1" 0.02',
    '10.0.0.2 - - [01/Jan/2024:00:00:02] "GET /b HTTP/1.1" 404 0 "-" "UA2" 0.01',
]

# Real-looking access log line samples for unit testing
SAMPLE_LINES = {
    "nginx_full": '192.168.1.1 - alice [29/Nov/2021:12:34:56 +0000] "GET /page.html HTTP/1.1" 200 2326 '
                  '"http://referrer.com/" "Mozilla/5.0 (X11; Linux x86_64)" 0.002',
    "no_request_time": '192.168.1.1 - - [29/Nov/2021:12:34:56 +0000] "GET /index.html HTTP/1.1" 304 0 '
                       '"-" "curl/8.4.0"',
    "dash_request_time": '10.1.1.1 - - [29/Nov/2021:12:34:57 +0000] "HEAD / HTTP/1.0" 200 0 "-" "-" -',
    "post_with_query": '2001:db8::1 - - [29/Nov/2021:12:35:00 +0000] "POST /api/v1/items?page=2 HTTP/2.0" 201 512 '
                       '"https://example.com/app" "python-requests/2.31.0" 0.145',
    "empty_fields": '10.0.0.3 - - [01/Jan/2024:00:00:03] "GET /c HTTP/1.1" 200 10 "" "" 0.01',
    "server_error":'172.16.0.9 - - [29/Nov/2021:12:35:01 +0000] "GET /boom HTTP/1.1" 503 157 "-" "Go-http-client/1.1" 1.5',
    "status_too_high": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 600 100 "-" "UA1" 0.01',
    "status_too_low": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 99 100 "-" "UA1" 0.01',
    "status_text": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" OK 100 "-" "UA1" 0.01',
    "bytes_dash": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 - "-" "UA1" 0.01',
    "bytes_negative": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 -5 "-" "UA1" 0.01',
    "bytes_text": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 12a "-" "UA1" 0.01',
    "missing_quotes": '10.0.0.1 - - [01/Jan/2024:00:00:00] GET /a HTTP/1.1 200 100 "-" "UA1" 0.01',
    "missing_bracket": '10.0.0.1 - - 01/Jan/2024:00:00:00 "GET /a HTTP/1.1" 200 100 "-" "UA1" 0.01',
    "missing_agent": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 100 "-"',
    "bad_request_time": '10.0.0.1 - - [01/Jan/2024:00:00:00] "GET /a HTTP/1.1" 200 100 "-" "UA1" fast',
    "syslog": 'Nov 29 12:34:56 web01 sshd[1234]: Failed password for root from 10.0.0.5',
    "blank": "",
}
