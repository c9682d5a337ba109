import argparse
import asyncio
import functools
import logging
import sys

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import jack, reaper
from .config import (
    DISCOVERY_ATTEMPTS,
    DISCOVERY_TIMEOUT,
    HTTP_HOST,
    HTTP_PORT,
    LOG_FORMAT,
    LOG_LEVEL,
    REQUIRED_SAMPLE_RATE,
)
from .discovery import find_mixer
from .errors import HostRenameError, MixerError
from .scanner import SCANNERS, open_scanner

logger = logging.getLogger(__name__)


async def scan(scanner_factory):
    """Run one full scan; the connection is always released"""
    scanner = await scanner_factory()
    try:
        await scanner.ensure_sample_rate()
        ports = await scanner.scan_card_routing()
    finally:
        await scanner.terminate()

    logger.info(f"Scanned {len(ports)} ports: {ports}")
    return ports


def make_scanner_factory(mixer=None, family="x32", sample_rate=REQUIRED_SAMPLE_RATE,
                         discovery_timeout=DISCOVERY_TIMEOUT, discovery_attempts=DISCOVERY_ATTEMPTS):
    async def factory():
        if mixer is not None:
            return await open_scanner(family, mixer, sample_rate)

        logger.info("Looking for a console on the network")
        info = await asyncio.get_running_loop().run_in_executor(
            None, functools.partial(find_mixer, discovery_timeout, discovery_attempts)
        )
        return await open_scanner(info.family, info.ip, sample_rate)

    return factory


def create_app(scanner_factory):
    app = FastAPI(title="X32 Port Namer")

    @app.get("/routing")
    async def read_routing():
        try:
            ports = await scan(scanner_factory)
        except MixerError as e:
            logger.error(f"Error scanning console: {e}")
            return JSONResponse(
                content={"status": "error", "message": str(e)},
                status_code=502
            )
        return {"status": "success", "ports": ports}

    @app.post("/routing/jack")
    async def apply_jack_aliases():
        try:
            ports = await scan(scanner_factory)
            renamed = await asyncio.get_running_loop().run_in_executor(None, jack.apply_aliases, ports)
        except MixerError as e:
            logger.error(f"Error scanning console: {e}")
            return JSONResponse(
                content={"status": "error", "message": str(e)},
                status_code=502
            )
        except HostRenameError as e:
            logger.error(f"Error renaming JACK ports: {e}")
            return JSONResponse(
                content={"status": "error", "message": str(e)},
                status_code=500
            )
        return {"status": "success", "ports": ports, "renamed": renamed}

    return app


def build_parser():
    ap = argparse.ArgumentParser(
        prog="x32-portnamer",
        description="Name host audio ports after the console's card routing",
    )
    ap.add_argument('-v', '--verbose', action='store_true', help='Log OSC traffic')
    ap.add_argument('--mixer', metavar='IP', help='Console address (default: discover)')
    ap.add_argument('--family', choices=sorted(SCANNERS), default='x32',
                    help='Console family when --mixer is given')
    ap.add_argument('--sample-rate', type=int, choices=(44100, 48000), default=REQUIRED_SAMPLE_RATE,
                    help='Clock rate the console is switched to')
    ap.add_argument('--discovery-attempts', type=int, default=DISCOVERY_ATTEMPTS)

    commands = ap.add_subparsers(dest='command', required=True)
    rpr = commands.add_parser('reaper', help='Write input aliases to a REAPER ini file')
    rpr.add_argument('config', help='Path to reaper.ini')
    commands.add_parser('jack', help='Alias JACK system capture ports')
    srv = commands.add_parser('serve', help='Serve scans over HTTP')
    srv.add_argument('--host', default=HTTP_HOST)
    srv.add_argument('--port', type=int, default=HTTP_PORT)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format=LOG_FORMAT
    )

    factory = make_scanner_factory(
        mixer=args.mixer,
        family=args.family,
        sample_rate=args.sample_rate,
        discovery_attempts=args.discovery_attempts,
    )

    if args.command == 'serve':
        import uvicorn
        logger.info("Starting FastAPI server")
        uvicorn.run(create_app(factory), host=args.host, port=args.port)
        return 0

    try:
        ports = asyncio.run(scan(factory))
        if args.command == 'reaper':
            reaper.set_port_aliases(args.config, ports)
        else:
            jack.apply_aliases(ports)
    except MixerError as e:
        logger.error(f"Error talking to console: {e}")
        return 1
    except HostRenameError as e:
        logger.error(f"Error renaming ports: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
