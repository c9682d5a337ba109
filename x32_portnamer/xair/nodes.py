"""OSC parameter nodes of an X Air console"""

from collections import namedtuple

from ..parameters import int_param, str_param

USB_SLOTS = 18

CLOCK_RATE = int_param("/-prefs/clockrate")

AUX_RETURN_NAME = str_param("/rtn/aux/config/name")
MAIN_NAME = str_param("/lr/config/name")

PatchPoint = namedtuple("PatchPoint", "src, pos")


def usb_patch_point(index):
    if not 0 <= index < USB_SLOTS:
        raise IndexError(f"No USB slot {index + 1}")
    base = f"/routing/usb/{index + 1:02d}"
    return PatchPoint(int_param(f"{base}/src"), int_param(f"{base}/pos"))


def channel_name(index):
    return str_param(f"/ch/{index + 1:02d}/config/name")


def fx_return_name(index):
    return str_param(f"/rtn/{index + 1}/config/name")


def bus_name(index):
    return str_param(f"/bus/{index + 1}/config/name")


def fx_send_name(index):
    return str_param(f"/fxsend/{index + 1}/config/name")
