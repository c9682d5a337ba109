"""Port aliases on a running JACK server"""

import logging
import re
import subprocess

from .errors import HostRenameError

logger = logging.getLogger(__name__)

CAPTURE_PORT = re.compile(r"^system:capture_(\d+)$")


def _run(cmd):
    try:
        p = subprocess.run(list(cmd), capture_output=True, text=True)
    except OSError as e:
        raise HostRenameError(f"{cmd[0]} failed: {e}") from e
    if p.returncode != 0:
        msg = (p.stderr or p.stdout).strip()
        raise HostRenameError(f"{cmd[0]} failed: {msg}")
    return p.stdout


def list_ports():
    """Port name -> current aliases, as listed by jack_lsp -A"""
    ports = {}
    current = None
    for line in _run(["jack_lsp", "-A"]).splitlines():
        if not line.strip():
            continue
        if line[0].isspace():
            # Aliases are indented below their port
            if current is not None:
                ports[current].append(line.strip())
        else:
            current = line.strip()
            ports[current] = []
    return ports


def capture_ports(ports):
    """Capture port number -> port name"""
    found = {}
    for name in ports:
        match = CAPTURE_PORT.match(name)
        if match:
            found[int(match.group(1))] = name
    return found


def get_capture_ports():
    return sorted(capture_ports(list_ports()))


def set_alias(port, alias, current=()):
    """Replace the aliases of system:capture_<port>; None leaves it without one"""
    name = f"system:capture_{port}"
    # JACK keeps at most two aliases per port
    for old in current:
        _run(["jack_alias", "-u", name, old])
    if alias is not None:
        _run(["jack_alias", name, alias])


def apply_aliases(names):
    """Alias system:capture_<n> to the n-th scanned name"""
    ports = list_ports()
    renamed = 0
    for port, name in sorted(capture_ports(ports).items()):
        if port > len(names):
            continue
        set_alias(port, names[port - 1], ports[name])
        renamed += 1
    logger.info(f"Updated aliases of {renamed} JACK capture ports")
    return renamed
