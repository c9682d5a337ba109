import asyncio
import logging

from pythonosc import dispatcher, osc_server
from pythonosc.osc_message_builder import OscMessageBuilder

from .config import LOCAL_PORT, XREMOTE_INTERVAL
from .errors import MixerConnectionError, QueryTimeout

logger = logging.getLogger(__name__)


class ReplyDispatcher(dispatcher.Dispatcher):
    """Hands every OSC message from the console back to its connection"""

    def __init__(self, connection):
        super().__init__()
        self._connection = connection
        self.set_default_handler(self._handle_reply)

    def _handle_reply(self, address, *args):
        logger.debug(f"Received OSC message: {address} {args}")
        self._connection.deliver(address, args)


class MixerConnection:
    """Asyncio OSC link to a single console.

    Queries are sent through the server's own transport so the console
    answers on the port we listen on.
    """

    def __init__(self, mixer_address, mixer_port, local_port=LOCAL_PORT):
        self._mixer = (mixer_address, mixer_port)
        self._local_port = local_port
        self._transport = None
        self._values = {}  # Latest reply arguments per watched address
        self._watched = set()
        self._pending = {}
        self._keepalive = None

    @property
    def is_open(self):
        return self._transport is not None

    async def open(self):
        logger.info(f"Opening OSC connection to {self._mixer[0]}:{self._mixer[1]}")
        server = osc_server.AsyncIOOSCUDPServer(
            ("0.0.0.0", self._local_port),
            ReplyDispatcher(self),
            asyncio.get_running_loop(),
        )
        try:
            self._transport, _ = await server.create_serve_endpoint()
        except OSError as e:
            raise MixerConnectionError(f"Could not open OSC port {self._local_port}: {e}") from e

    async def close(self):
        self.stop_keepalive()
        if self._transport is not None:
            self._transport.close()
            self._transport = None
            logger.info(f"Closed OSC connection to {self._mixer[0]}")
        for futures in self._pending.values():
            for future in futures:
                if not future.done():
                    future.set_exception(MixerConnectionError("Connection closed"))
        self._pending.clear()
        self._values.clear()
        self._watched.clear()

    def send_message(self, address, value=None):
        if self._transport is None:
            raise MixerConnectionError(f"Not connected to {self._mixer[0]}")

        builder = OscMessageBuilder(address=address)
        if value is not None:
            for arg in value if isinstance(value, (list, tuple)) else [value]:
                builder.add_arg(arg)

        logger.debug(f"Sending {address} {value if value is not None else ''}")
        self._transport.sendto(builder.build().dgram, self._mixer)

    async def request(self, address, timeout):
        """Send an argument-less query and wait for the console's answer"""
        future = asyncio.get_running_loop().create_future()
        self._pending.setdefault(address, []).append(future)
        try:
            self.send_message(address)
            return await asyncio.wait_for(future, timeout)
        except asyncio.TimeoutError:
            logger.error(f"Timeout getting value for {address}")
            raise QueryTimeout(address, timeout) from None
        finally:
            waiters = self._pending.get(address)
            if waiters is not None:
                if future in waiters:
                    waiters.remove(future)
                if not waiters:
                    del self._pending[address]

    def deliver(self, address, args):
        if address in self._watched:
            self._values[address] = args
        for future in self._pending.pop(address, []):
            if not future.done():
                future.set_result(args)

    def cached(self, address):
        return self._values.get(address)

    def watch(self, address):
        """Start caching replies for address, dropping anything older"""
        self._watched.add(address)
        self._values.pop(address, None)

    def forget(self, address):
        self._watched.discard(address)
        self._values.pop(address, None)

    def start_keepalive(self):
        if self._keepalive is None:
            logger.debug("Subscribing to console updates")
            self._keepalive = asyncio.get_running_loop().create_task(self._maintain_subscription())

    def stop_keepalive(self):
        if self._keepalive is not None:
            self._keepalive.cancel()
            self._keepalive = None

    async def _maintain_subscription(self):
        """Renew /xremote before the console forgets about us"""
        while True:
            try:
                self.send_message("/xremote")
            except MixerConnectionError:
                logger.error("Error sending /xremote")
                return
            await asyncio.sleep(XREMOTE_INTERVAL)
