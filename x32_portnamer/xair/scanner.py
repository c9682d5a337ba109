import asyncio
import logging
import re

from ..config import REQUIRED_SAMPLE_RATE, XAIR_PORT
from ..connection import MixerConnection
from ..labels import custom_or_default, render_output
from ..parameters import ParameterDispatcher
from . import nodes
from .codes import CLOCK_RATES, USB_SOURCES, UsbSource

logger = logging.getLogger(__name__)

TRAILING_DIGIT = re.compile(r"\d$")


class XAirScanner:
    """Resolves the USB routing of an X Air / MR console to port names"""

    family = "xair"
    size = nodes.USB_SLOTS
    clock_rates = CLOCK_RATES

    def __init__(self, connection, dispatcher=None, sample_rate=REQUIRED_SAMPLE_RATE):
        self._connection = connection
        self._dispatcher = dispatcher or ParameterDispatcher(connection)
        if sample_rate not in CLOCK_RATES:
            raise ValueError(f"Unsupported sample rate {sample_rate}")
        self._clock_rate = CLOCK_RATES[sample_rate]

    @classmethod
    async def create(cls, mixer_address, **kwargs):
        connection = MixerConnection(mixer_address, XAIR_PORT)
        await connection.open()
        return cls(connection, **kwargs)

    async def ensure_sample_rate(self):
        # X Air consoles always run on their own clock
        token = self._dispatcher.subscription("sample-rate")
        try:
            (rate,) = await self._dispatcher.add_and_query(token, nodes.CLOCK_RATE)

            if rate != self._clock_rate:
                logger.info(f"Switching console clock rate from {rate} to {self._clock_rate.name}")
                self._dispatcher.set(nodes.CLOCK_RATE, int(self._clock_rate))
        finally:
            self._dispatcher.remove(token, nodes.CLOCK_RATE)

    async def scan_card_routing(self):
        return list(await asyncio.gather(
            *(self.resolve_single_patch_point(idx) for idx in range(nodes.USB_SLOTS))
        ))

    async def terminate(self):
        await self._connection.close()

    async def resolve_single_patch_point(self, idx):
        point = nodes.usb_patch_point(idx)
        source, tap = await self._dispatcher.query(point.src, point.pos)
        name = await self.resolve_usb_source(source)
        return render_output(name, tap)

    async def resolve_usb_source(self, source):
        match = USB_SOURCES.classify(source)
        if match is None:
            if source is not None:
                logger.warning(f"Unknown USB source {source}")
            return None

        kind, offset = match
        if kind == "channel":
            return await self._resolve_name(nodes.channel_name(offset), f"Ch {offset + 1}")
        elif kind == "aux":
            name = await self._resolve_name(nodes.AUX_RETURN_NAME, 'Aux')
            return f"{name} {'L' if source == UsbSource.AUX_L else 'R'}"
        elif kind == "fx":
            fx = offset // 4
            name = await self._resolve_name(nodes.fx_return_name(fx), f"FX {fx + 1}")
            return fx_return_label(name, offset)
        elif kind == "bus":
            return await self._resolve_name(nodes.bus_name(offset), f"Bus {offset + 1}")
        elif kind == "fx_send":
            return await self._resolve_name(nodes.fx_send_name(offset), f"FxSend {offset + 1}")
        else:
            name = await self._resolve_name(nodes.MAIN_NAME, 'Main')
            return f"{name} {'L' if source == UsbSource.L else 'R'}"

    async def _resolve_name(self, node, fallback):
        (name,) = await self._dispatcher.query(node)
        return custom_or_default(name, fallback)


def fx_return_label(name, offset):
    """'Reverb L', but 'Reverb2R' when the name already ends in a digit"""
    separator = '' if TRAILING_DIGIT.search(name) else ' '
    return f"{name}{separator}{'R' if offset % 2 else 'L'}"
