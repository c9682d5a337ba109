import logging
import socket
import time
from collections import namedtuple

from pythonosc.osc_message import OscMessage, ParseError
from pythonosc.osc_message_builder import OscMessageBuilder

from .config import BROADCAST_ADDRESS, DISCOVERY_ATTEMPTS, DISCOVERY_TIMEOUT, X32_PORT, XAIR_PORT
from .errors import DiscoveryError

logger = logging.getLogger(__name__)

MixerInfo = namedtuple("MixerInfo", "ip, name, model, firmware, family")

# Console family by the port it answers on
FAMILY_PORTS = {X32_PORT: "x32", XAIR_PORT: "xair"}


def parse_xinfo(data, sender):
    """Turn an /xinfo reply datagram into a MixerInfo, None if it is something else"""
    try:
        msg = OscMessage(data)
    except ParseError:
        logger.debug(f"Ignoring malformed datagram from {sender[0]}")
        return None

    if msg.address != "/xinfo" or len(msg.params) < 4:
        return None

    family = FAMILY_PORTS.get(sender[1])
    if family is None:
        return None

    ip, name, model, fw = msg.params[:4]
    return MixerInfo(ip or sender[0], name, model, fw, family)


def find_mixer(timeout=DISCOVERY_TIMEOUT, attempts=DISCOVERY_ATTEMPTS, broadcast=BROADCAST_ADDRESS):
    """Broadcast /xinfo to both console families and return the first one that answers"""
    request = OscMessageBuilder(address="/xinfo").build().dgram

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        sock.bind(("0.0.0.0", 0))

        for attempt in range(1, attempts + 1):
            logger.debug(f"Discovery attempt {attempt}")
            for port in FAMILY_PORTS:
                sock.sendto(request, (broadcast, port))

            deadline = time.monotonic() + timeout
            while time.monotonic() < deadline:
                sock.settimeout(max(deadline - time.monotonic(), 0.01))
                try:
                    data, sender = sock.recvfrom(4096)
                except socket.timeout:
                    break

                info = parse_xinfo(data, sender)
                if info is not None:
                    logger.info(f"Found {info.model} at {info.ip} (Name: {info.name}, Firmware: {info.firmware})")
                    return info

            if attempt < attempts:
                logger.info(f"No console answered, retrying... (attempt {attempt + 1}/{attempts})")
    except OSError as e:
        raise DiscoveryError(f"Discovery failed: {e}") from e
    finally:
        sock.close()

    raise DiscoveryError(f"No console answered after {attempts} attempts")
