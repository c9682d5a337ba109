"""
Numeric codes used by X Air / MR consoles.

These are not interchangeable with the X32 codes even where the
meaning overlaps.
"""

from enum import IntEnum

from ..bands import BandTable


class UsbSource(IntEnum):
    CH_1 = 0
    CH_16 = 15
    AUX_L = 16
    AUX_R = 17
    FX_1L = 18
    FX_4R = 25
    BUS_1 = 26
    BUS_6 = 31
    SEND_1 = 32
    SEND_4 = 35
    L = 36
    R = 37


class ClockRate(IntEnum):
    R44K1 = 0
    R48K = 1


CLOCK_RATES = {44100: ClockRate.R44K1, 48000: ClockRate.R48K}

USB_SOURCES = BandTable([
    (UsbSource.CH_16, "channel", UsbSource.CH_1),
    (UsbSource.AUX_R, "aux", UsbSource.AUX_L),
    (UsbSource.FX_4R, "fx", UsbSource.FX_1L),
    (UsbSource.BUS_6, "bus", UsbSource.BUS_1),
    (UsbSource.SEND_4, "fx_send", UsbSource.SEND_1),
    (UsbSource.R, "main", UsbSource.L),
])
