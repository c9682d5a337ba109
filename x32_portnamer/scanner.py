from typing import List, Optional, Protocol

from .config import REQUIRED_SAMPLE_RATE
from .x32.scanner import X32Scanner
from .xair.scanner import XAirScanner

SCANNERS = {
    X32Scanner.family: X32Scanner,
    XAirScanner.family: XAirScanner,
}


class MixerScanner(Protocol):
    """What the rest of the tool needs from a console, whatever its family"""

    async def ensure_sample_rate(self) -> None: ...

    async def scan_card_routing(self) -> List[Optional[str]]: ...

    async def terminate(self) -> None: ...


async def open_scanner(family, mixer_address, sample_rate=REQUIRED_SAMPLE_RATE) -> MixerScanner:
    try:
        scanner_class = SCANNERS[family]
    except KeyError:
        raise ValueError(f"Unknown console family {family!r}") from None
    if sample_rate not in scanner_class.clock_rates:
        raise ValueError(f"Unsupported sample rate {sample_rate} for {family}")
    return await scanner_class.create(mixer_address, sample_rate=sample_rate)
