import asyncio
import logging
from collections import namedtuple

from .config import QUERY_TIMEOUT

logger = logging.getLogger(__name__)


class Parameter(namedtuple("Parameter", "address, kind")):
    """A single console parameter, addressed by its OSC path"""

    __slots__ = ()

    def decode(self, args):
        """Convert reply arguments to a value, None when the console sent nothing"""
        if not args:
            return None
        value = args[0]
        if self.kind == "int":
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
            return int(value)
        if self.kind == "str":
            return value if isinstance(value, str) else None
        return value


def int_param(address):
    return Parameter(address, "int")


def str_param(address):
    return Parameter(address, "str")


class SubscriptionToken:
    """Handle for one group of live subscriptions, compared by identity"""

    __slots__ = ("name",)

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<SubscriptionToken {self.name} at {id(self):#x}>"


class ParameterDispatcher:
    """Resolves parameters of a connected console to values.

    Nodes subscribed through add_and_query() are kept fresh by the
    console's update stream and answered from the cache until every
    token holding them has been removed.
    """

    def __init__(self, connection, timeout=QUERY_TIMEOUT):
        self.connection = connection
        self._timeout = timeout
        self._subscriptions = {}

    def subscription(self, name="scan"):
        return SubscriptionToken(name)

    async def query(self, *nodes):
        return list(await asyncio.gather(*(self._query_one(node) for node in nodes)))

    async def add_and_query(self, token, *nodes):
        if not self._subscriptions:
            self.connection.start_keepalive()
        for node in nodes:
            if not self._is_subscribed(node.address):
                self.connection.watch(node.address)
        self._subscriptions.setdefault(token, set()).update(node.address for node in nodes)
        return await self.query(*nodes)

    def remove(self, token, *nodes):
        addresses = self._subscriptions.get(token)
        if addresses is None:
            return

        for node in nodes:
            addresses.discard(node.address)
            if not self._is_subscribed(node.address):
                self.connection.forget(node.address)
        if not addresses:
            del self._subscriptions[token]
        if not self._subscriptions:
            self.connection.stop_keepalive()

    def set(self, node, value):
        logger.debug(f"Setting {node.address} to {value}")
        self.connection.send_message(node.address, value)

    def _is_subscribed(self, address):
        return any(address in addresses for addresses in self._subscriptions.values())

    async def _query_one(self, node):
        if self._is_subscribed(node.address):
            cached = self.connection.cached(node.address)
            if cached is not None:
                return node.decode(cached)

        logger.debug(f"Requesting value for {node.address}")
        args = await self.connection.request(node.address, self._timeout)
        return node.decode(args)
