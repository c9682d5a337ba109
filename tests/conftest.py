import asyncio

import pytest

from x32_portnamer.parameters import SubscriptionToken


class FakeDispatcher:
    """Answers queries from a dict of OSC address -> value"""

    def __init__(self, values=None, error=None):
        self.values = dict(values or {})
        self.error = error
        self.writes = []
        self.added = []
        self.removed = []
        self.queried = []

    def subscription(self, name="scan"):
        return SubscriptionToken(name)

    async def query(self, *nodes):
        self.queried.extend(node.address for node in nodes)
        if self.error is not None:
            raise self.error
        return [self.values.get(node.address) for node in nodes]

    async def add_and_query(self, token, *nodes):
        self.added.append((token, [node.address for node in nodes]))
        return await self.query(*nodes)

    def remove(self, token, *nodes):
        self.removed.append((token, [node.address for node in nodes]))

    def set(self, node, value):
        self.writes.append((node.address, value))


class FakeConnection:
    def __init__(self):
        self.closed = 0

    async def close(self):
        self.closed += 1


class FakeScanner:
    def __init__(self, ports, error=None):
        self.ports = ports
        self.error = error
        self.calls = []

    async def ensure_sample_rate(self):
        self.calls.append("ensure_sample_rate")
        if self.error is not None:
            raise self.error

    async def scan_card_routing(self):
        self.calls.append("scan_card_routing")
        return list(self.ports)

    async def terminate(self):
        self.calls.append("terminate")


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def connection():
    return FakeConnection()
