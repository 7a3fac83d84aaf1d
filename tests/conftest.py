"""
Pytest configuration and fixtures for msgr tests.
"""

import asyncio

import pytest

import msgr


class RecordingTransport(msgr.Transport):
    """Transport double that keeps everything sent through it."""

    def __init__(self):
        self.sent = []
        self.cb = None

    def send(self, payload, transfer=()):
        self.sent.append((payload, list(transfer)))

    def on_receive(self, cb):
        self.cb = cb

    def envelopes(self):
        return [msgr.unpack_envelope(payload) for payload, _ in self.sent]


@pytest.fixture
def settle():
    """Let queued loop callbacks (transmits, deliveries, continuations) run."""

    async def _settle(rounds=25):
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _settle


@pytest.fixture
def make_pair():
    """Build a connected (client, worker) pair. Call from inside a running loop."""

    def _make(worker_handlers=None, client_handlers=None, **kwargs):
        scope = msgr.WorkerScope(name="test-worker")
        worker = msgr.worker(worker_handlers or {}, scope, **kwargs)
        client = msgr.client(scope, client_handlers or {}, **kwargs)
        return client, worker

    return _make


@pytest.fixture
def recording_transport():
    return RecordingTransport()
