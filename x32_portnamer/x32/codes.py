"""
Numeric codes used by X32 / M32 consoles.

Values follow the console's OSC enumerations, e.g. /config/routing/CARD/1-8
reports a PatchBlock and /outputs/main/01/src an OutputSource.
"""

from enum import IntEnum

from ..bands import BandTable


class PatchBlock(IntEnum):
    LOCAL_1_8 = 0
    LOCAL_9_16 = 1
    LOCAL_17_24 = 2
    LOCAL_25_32 = 3
    A_1_8 = 4
    A_9_16 = 5
    A_17_24 = 6
    A_25_32 = 7
    A_33_40 = 8
    A_41_48 = 9
    B_1_8 = 10
    B_9_16 = 11
    B_17_24 = 12
    B_25_32 = 13
    B_33_40 = 14
    B_41_48 = 15
    CARD_1_8 = 16
    CARD_9_16 = 17
    CARD_17_24 = 18
    CARD_25_32 = 19
    OUT_1_8 = 20
    OUT_9_16 = 21
    P16_1_8 = 22
    P16_9_16 = 23
    AUX_1_6_MON = 24
    AUX_IN_1_6_TB = 25
    USER_OUT_1_8 = 26
    USER_OUT_9_16 = 27
    USER_OUT_17_24 = 28
    USER_OUT_25_32 = 29
    USER_OUT_33_40 = 30
    USER_OUT_41_48 = 31
    USER_IN_1_8 = 32
    USER_IN_9_16 = 33
    USER_IN_17_24 = 34
    USER_IN_25_32 = 35


class OutputSource(IntEnum):
    OFF = 0
    MAIN_L = 1
    MAIN_R = 2
    MC = 3
    MIX_BUS_1 = 4
    MIX_BUS_16 = 19
    MATRIX_1 = 20
    MATRIX_6 = 25
    DIRECT_OUT_CH_1 = 26
    DIRECT_OUT_CH_32 = 57
    DIRECT_OUT_AUX_1 = 58
    DIRECT_OUT_AUX_8 = 65
    DIRECT_OUT_FX_1L = 66
    DIRECT_OUT_FX_4R = 73
    MONITOR_L = 74
    MONITOR_R = 75
    TALKBACK = 76


class OutputPos(IntEnum):
    IN = 0
    IN_M = 1
    PRE_EQ = 2
    PRE_EQ_M = 3
    POST_EQ = 4
    POST_EQ_M = 5
    PRE = 6
    PRE_M = 7
    POST = 8


class UserInSource(IntEnum):
    OFF = 0
    LOCAL_IN_1 = 1
    LOCAL_IN_32 = 32
    AES50A_1 = 33
    AES50A_48 = 80
    AES50B_1 = 81
    AES50B_48 = 128
    CARD_IN_1 = 129
    CARD_IN_32 = 160
    AUX_IN_1 = 161
    AUX_IN_6 = 166
    TB_INTERNAL = 167
    TB_EXTERNAL = 168


class UserOutDest(IntEnum):
    # 0..168 mirror UserInSource
    TB_EXTERNAL = 168
    OUTPUTS_1 = 169
    OUTPUTS_16 = 184
    P16_1 = 185
    P16_16 = 200
    AUX_1 = 201
    AUX_6 = 206
    MONITOR_L = 207
    MONITOR_R = 208


class AuxInPatch(IntEnum):
    AUX_1_6 = 0
    LOCAL_1_2 = 1
    LOCAL_1_4 = 2
    LOCAL_1_6 = 3
    A_1_2 = 4
    A_1_4 = 5
    A_1_6 = 6
    B_1_2 = 7
    B_1_4 = 8
    B_1_6 = 9
    USER_IN_1_2 = 10
    USER_IN_1_4 = 11
    USER_IN_1_6 = 12


class ClockSource(IntEnum):
    INTERNAL = 0
    AES50A = 1
    AES50B = 2
    CARD = 3


class ClockRate(IntEnum):
    R48K = 0
    R44K1 = 1


CLOCK_RATES = {44100: ClockRate.R44K1, 48000: ClockRate.R48K}


PATCH_BLOCKS = BandTable([
    (PatchBlock.LOCAL_25_32, "local", PatchBlock.LOCAL_1_8),
    (PatchBlock.A_41_48, "aes50a", PatchBlock.A_1_8),
    (PatchBlock.B_41_48, "aes50b", PatchBlock.B_1_8),
    (PatchBlock.CARD_25_32, "card", PatchBlock.CARD_1_8),
    (PatchBlock.OUT_9_16, "main", PatchBlock.OUT_1_8),
    (PatchBlock.P16_9_16, "p16", PatchBlock.P16_1_8),
    (PatchBlock.AUX_1_6_MON, "aux", PatchBlock.AUX_1_6_MON),
    (PatchBlock.AUX_IN_1_6_TB, "aux_in", PatchBlock.AUX_IN_1_6_TB),
    (PatchBlock.USER_OUT_41_48, "user_out", PatchBlock.USER_OUT_1_8),
    (PatchBlock.USER_IN_25_32, "user_in", PatchBlock.USER_IN_1_8),
])

OUTPUT_SOURCES = BandTable([
    (OutputSource.OFF, "off", OutputSource.OFF),
    (OutputSource.MAIN_R, "main", OutputSource.MAIN_L),
    (OutputSource.MC, "mc", OutputSource.MC),
    (OutputSource.MIX_BUS_16, "bus", OutputSource.MIX_BUS_1),
    (OutputSource.MATRIX_6, "matrix", OutputSource.MATRIX_1),
    (OutputSource.DIRECT_OUT_CH_32, "channel", OutputSource.DIRECT_OUT_CH_1),
    (OutputSource.DIRECT_OUT_AUX_8, "aux", OutputSource.DIRECT_OUT_AUX_1),
    (OutputSource.DIRECT_OUT_FX_4R, "fx", OutputSource.DIRECT_OUT_FX_1L),
    (OutputSource.MONITOR_R, "monitor", OutputSource.MONITOR_L),
    (OutputSource.TALKBACK, "talkback", OutputSource.TALKBACK),
])

USER_IN_SOURCES = BandTable([
    (UserInSource.OFF, "off", UserInSource.OFF),
    (UserInSource.LOCAL_IN_32, "local", UserInSource.LOCAL_IN_1),
    (UserInSource.AES50A_48, "aes50a", UserInSource.AES50A_1),
    (UserInSource.AES50B_48, "aes50b", UserInSource.AES50B_1),
    (UserInSource.CARD_IN_32, "card", UserInSource.CARD_IN_1),
    (UserInSource.AUX_IN_6, "aux_in", UserInSource.AUX_IN_1),
    (UserInSource.TB_INTERNAL, "tb_internal", UserInSource.TB_INTERNAL),
    (UserInSource.TB_EXTERNAL, "tb_external", UserInSource.TB_EXTERNAL),
])

USER_OUT_DESTS = BandTable([
    (UserOutDest.TB_EXTERNAL, "user_in", 0),
    (UserOutDest.OUTPUTS_16, "main", UserOutDest.OUTPUTS_1),
    (UserOutDest.P16_16, "p16", UserOutDest.P16_1),
    (UserOutDest.AUX_6, "aux", UserOutDest.AUX_1),
    (UserOutDest.MONITOR_R, "monitor", UserOutDest.MONITOR_L),
])


def _aux_in_patch(label, covered):
    return tuple(
        f"{label} {i + 1}" if i < covered else f"Aux In {i + 1}"
        for i in range(6)
    )


# Aux input selectors that map straight to physical inputs
AUX_IN_ROUTING_LABELS = {
    AuxInPatch.AUX_1_6: _aux_in_patch("Aux In", 6),
    AuxInPatch.LOCAL_1_2: _aux_in_patch("Local", 2),
    AuxInPatch.LOCAL_1_4: _aux_in_patch("Local", 4),
    AuxInPatch.LOCAL_1_6: _aux_in_patch("Local", 6),
    AuxInPatch.A_1_2: _aux_in_patch("Aes50 A", 2),
    AuxInPatch.A_1_4: _aux_in_patch("Aes50 A", 4),
    AuxInPatch.A_1_6: _aux_in_patch("Aes50 A", 6),
    AuxInPatch.B_1_2: _aux_in_patch("Aes50 B", 2),
    AuxInPatch.B_1_4: _aux_in_patch("Aes50 B", 4),
    AuxInPatch.B_1_6: _aux_in_patch("Aes50 B", 6),
}
