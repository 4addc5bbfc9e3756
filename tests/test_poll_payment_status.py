"""Tests for the status polling script (no network, no sleeping)."""

import importlib.util
from pathlib import Path

import requests

SCRIPT = Path(__file__).parent.parent / "scripts" / "poll_payment_status.py"
spec = importlib.util.spec_from_file_location("poll_payment_status", SCRIPT)
poll_payment_status = importlib.util.module_from_spec(spec)
spec.loader.exec_module(poll_payment_status)


def _fetcher(responses):
    calls = []

    def fetch(url):
        calls.append(url)
        item = responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return fetch, calls


def test_polls_until_terminal_status():
    fetch, calls = _fetcher([
        {"status": "pending", "terminal": False},
        requests.ConnectionError("blip"),
        {"status": "successful", "terminal": True},
    ])
    sleeps = []
    status = poll_payment_status.poll_status(
        "http://api.test/", "42", interval=5, max_attempts=10, fetch=fetch, sleep=sleeps.append
    )
    assert status == "successful"
    assert calls[0] == "http://api.test/api/transactions/42/verify"
    assert len(calls) == 3
    assert sleeps == [5, 5]


def test_gives_up_after_max_attempts():
    fetch, calls = _fetcher([{"status": "pending", "terminal": False}] * 3)
    status = poll_payment_status.poll_status(
        "http://api.test", "42", interval=1, max_attempts=3, fetch=fetch, sleep=lambda _: None
    )
    assert status is None
    assert len(calls) == 3
