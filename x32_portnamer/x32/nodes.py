"""OSC parameter nodes of an X32 console"""

from collections import namedtuple

from ..parameters import int_param, str_param

CARD_ROUTING = tuple(
    int_param(f"/config/routing/CARD/{block}")
    for block in ("1-8", "9-16", "17-24", "25-32")
)
AUX_IN_ROUTING = int_param("/config/routing/IN/AUX")

USER_ROUTING_IN = tuple(int_param(f"/config/userrout/in/{i:02d}") for i in range(1, 33))
USER_ROUTING_OUT = tuple(int_param(f"/config/userrout/out/{i:02d}") for i in range(1, 49))

CLOCK_SOURCE = int_param("/-prefs/clocksource")
CLOCK_RATE = int_param("/-prefs/clockrate")

MAIN_ST_NAME = str_param("/main/st/config/name")
MAIN_M_NAME = str_param("/main/m/config/name")

Output = namedtuple("Output", "src, pos")

# Output collection name -> number of outputs on the console
OUTPUT_COLLECTIONS = {"main": 16, "p16": 16, "aux": 6}


def output(collection, index):
    """Source and tap parameters of a zero-based output"""
    if not 0 <= index < OUTPUT_COLLECTIONS[collection]:
        raise IndexError(f"No output {index + 1} in {collection}")
    base = f"/outputs/{collection}/{index + 1:02d}"
    return Output(int_param(f"{base}/src"), int_param(f"{base}/pos"))


def bus_name(index):
    return str_param(f"/bus/{index + 1:02d}/config/name")


def matrix_name(index):
    return str_param(f"/mtx/{index + 1:02d}/config/name")


def channel_name(index):
    return str_param(f"/ch/{index + 1:02d}/config/name")


def aux_in_name(index):
    return str_param(f"/auxin/{index + 1:02d}/config/name")


def fx_return_name(index):
    return str_param(f"/fxrtn/{index + 1:02d}/config/name")
