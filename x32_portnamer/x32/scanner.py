import asyncio
import logging

from ..config import REQUIRED_SAMPLE_RATE, X32_PORT
from ..connection import MixerConnection
from ..labels import absent, custom_or_default, gen_range, render_output, tap_label
from ..parameters import ParameterDispatcher
from . import nodes
from .codes import (
    AUX_IN_ROUTING_LABELS,
    CLOCK_RATES,
    OUTPUT_SOURCES,
    PATCH_BLOCKS,
    USER_IN_SOURCES,
    USER_OUT_DESTS,
    AuxInPatch,
    ClockSource,
    OutputSource,
    UserOutDest,
)

logger = logging.getLogger(__name__)

# Fixed labels for the physical blocks, by band kind
BLOCK_LABELS = {"local": "Local", "aes50a": "Aes50 A", "aes50b": "Aes50 B", "card": "Card"}


class X32Scanner:
    """Resolves the card routing of an X32 / M32 console to port names"""

    family = "x32"
    size = 32
    clock_rates = CLOCK_RATES

    def __init__(self, connection, dispatcher=None, sample_rate=REQUIRED_SAMPLE_RATE):
        self._connection = connection
        self._dispatcher = dispatcher or ParameterDispatcher(connection)
        if sample_rate not in CLOCK_RATES:
            raise ValueError(f"Unsupported sample rate {sample_rate}")
        self._clock_rate = CLOCK_RATES[sample_rate]

    @classmethod
    async def create(cls, mixer_address, **kwargs):
        connection = MixerConnection(mixer_address, X32_PORT)
        await connection.open()
        return cls(connection, **kwargs)

    async def ensure_sample_rate(self):
        token = self._dispatcher.subscription("sample-rate")
        try:
            source, rate = await self._dispatcher.add_and_query(token, nodes.CLOCK_SOURCE, nodes.CLOCK_RATE)

            if rate != self._clock_rate and source == ClockSource.INTERNAL:
                logger.info(f"Switching console clock rate from {rate} to {self._clock_rate.name}")
                self._dispatcher.set(nodes.CLOCK_RATE, int(self._clock_rate))
            elif rate != self._clock_rate:
                logger.warning(f"Console is synced to clock source {source}, leaving rate {rate} alone")
        finally:
            self._dispatcher.remove(token, nodes.CLOCK_SOURCE, nodes.CLOCK_RATE)

    async def scan_card_routing(self):
        blocks = await self._dispatcher.query(*nodes.CARD_ROUTING)
        names = await asyncio.gather(*(self.resolve_block_routing(block) for block in blocks))
        return [name for block in names for name in block]

    async def terminate(self):
        await self._connection.close()

    async def resolve_block_routing(self, block):
        match = PATCH_BLOCKS.classify(block)
        if match is None:
            if block is not None:
                logger.warning(f"Unknown patch block {block}")
            return absent(8)

        kind, offset = match
        if kind in BLOCK_LABELS:
            return gen_range(offset * 8, BLOCK_LABELS[kind])
        elif kind in ("main", "p16"):
            return await self.resolve_output_block(kind, offset * 8)
        elif kind == "aux":
            aux_outs = await self.resolve_output_block("aux", 0, 6)
            return aux_outs + ["Monitor L", "Monitor R"]
        elif kind == "aux_in":
            aux_ins = await self.resolve_aux_in_remap()
            return aux_ins + ["Talkback Int", "Talkback Ext"]
        elif kind == "user_out":
            return await self.resolve_user_out_block(offset)
        else:
            return await self.resolve_user_in_block(offset)

    async def resolve_output_block(self, collection, base=0, size=8):
        return list(await asyncio.gather(
            *(self.resolve_single_output(collection, base + i) for i in range(size))
        ))

    async def resolve_single_output(self, collection, index):
        node = nodes.output(collection, index)
        source, tap = await self._dispatcher.query(node.src, node.pos)
        return await self.resolve_output(source, tap)

    async def resolve_output(self, source, tap):
        if source is None or tap_label(tap) is None:
            return None
        return render_output(await self.resolve_output_source(source), tap)

    async def resolve_output_source(self, source):
        match = OUTPUT_SOURCES.classify(source)
        if match is None:
            logger.warning(f"Unknown output source {source}")
            return None

        kind, offset = match
        if kind == "off":
            return 'Off'
        elif kind == "main":
            name = await self._resolve_name(nodes.MAIN_ST_NAME, 'Main')
            return f"{name} {'L' if source == OutputSource.MAIN_L else 'R'}"
        elif kind == "mc":
            return await self._resolve_name(nodes.MAIN_M_NAME, 'M/C')
        elif kind == "bus":
            return await self._resolve_name(nodes.bus_name(offset), f"Bus {offset + 1}")
        elif kind == "matrix":
            return await self._resolve_name(nodes.matrix_name(offset), f"Matrix {offset + 1}")
        elif kind == "channel":
            return await self._resolve_name(nodes.channel_name(offset), f"Ch {offset + 1}")
        elif kind == "aux":
            return await self._resolve_name(nodes.aux_in_name(offset), f"Aux {offset + 1}")
        elif kind == "fx":
            # FX returns are stereo pairs, one channel per side
            side = 'R' if offset % 2 else 'L'
            return await self._resolve_name(nodes.fx_return_name(offset), f"FX {offset // 2 + 1}{side}")
        elif kind == "monitor":
            return f"Monitor {'L' if source == OutputSource.MONITOR_L else 'R'}"
        else:
            return 'Talkback'

    async def resolve_aux_in_remap(self):
        (patch,) = await self._dispatcher.query(nodes.AUX_IN_ROUTING)

        if patch in AUX_IN_ROUTING_LABELS:
            return list(AUX_IN_ROUTING_LABELS[patch])
        if patch not in (AuxInPatch.USER_IN_1_2, AuxInPatch.USER_IN_1_4, AuxInPatch.USER_IN_1_6):
            if patch is not None:
                logger.warning(f"Unknown aux input routing {patch}")
            return absent(6)

        user_in = await self.resolve_user_in_block(0)
        covered = {AuxInPatch.USER_IN_1_2: 2, AuxInPatch.USER_IN_1_4: 4, AuxInPatch.USER_IN_1_6: 6}[patch]
        return user_in[:covered] + [f"Aux In {i + 1}" for i in range(covered, 6)]

    async def resolve_user_in_block(self, block):
        sources = await self._dispatcher.query(*nodes.USER_ROUTING_IN[block * 8:block * 8 + 8])
        return [resolve_user_in(source) for source in sources]

    async def resolve_user_out_block(self, block):
        dests = await self._dispatcher.query(*nodes.USER_ROUTING_OUT[block * 8:block * 8 + 8])
        return list(await asyncio.gather(*(self.resolve_user_out(dest) for dest in dests)))

    async def resolve_user_out(self, dest):
        match = USER_OUT_DESTS.classify(dest)
        if match is None:
            return None

        kind, offset = match
        if kind == "user_in":
            return resolve_user_in(dest)
        elif kind == "monitor":
            return 'Monitor L' if dest == UserOutDest.MONITOR_L else 'Monitor R'
        return await self.resolve_single_output(kind, offset)

    async def _resolve_name(self, node, fallback):
        (name,) = await self._dispatcher.query(node)
        return custom_or_default(name, fallback)


def resolve_user_in(source):
    """Label of a physical input as used by the user routing matrix"""
    match = USER_IN_SOURCES.classify(source)
    if match is None:
        return None

    kind, offset = match
    if kind == "off":
        return 'Off'
    elif kind == "tb_internal":
        return 'Talkback Int'
    elif kind == "tb_external":
        return 'Talkback Ext'
    elif kind == "aux_in":
        return f"Aux In {offset + 1}"
    return f"{BLOCK_LABELS[kind]} {offset + 1}"
