"""Building and framing RS-232C control strings for Panasonic MX30/50/70 mixers.

Command templates use two kinds of placeholders, each two characters wide:

``~x``
    Replaced by the current parameter doubled, as two hex digits. When ``x``
    is not ``0`` the value is also remembered under the name ``x``.
``*x``
    Replaced by the value last remembered under the name ``x``, as two hex
    digits (``00`` if nothing was stored yet).
"""

from __future__ import annotations

import logging
from typing import BinaryIO

log = logging.getLogger(__name__)

STX = 0x02
ETX = 0x03

MAX_COMMAND_LENGTH = 13
SWITCH_SLOTS = 20
_SCAN_LIMIT = 11

MX30_A_B_MIX_LEVEL = "VMM:~0"

MX30_A_BUS_MOSAIC_STEP = "VDE:AMS~0"
MX30_THRESHOLD_LUM_KEY = "VKL:~0"
MX30_CENTER_WIPE_X = "VPS:N~d*e"
MX30_CENTER_WIPE_Y = "VPS:N*d~e"
MX30_SCENE_GRABER_ON = "VSB:N"
MX30_SCENE_GRABER_OFF = "VSB:F"

MX30_WIPE = "VWP:~0ZMF"  # max 26
MX30_KEY_SLICE = "VKS:~0F"

MX30_STROBO = "VDE:ASR~"  # max 62
MX30_MOSAIC = "VDE:AMS~"  # max 7
MX30_PAINT = "VDE:APN~"  # max 30

MX30_A_BUS_STROBO_OFF = "VDE:ASROF"
MX30_A_BUS_MOSAIC_OFF = "VDE:AMSOF"
MX30_A_BUS_PAINT_OFF = "VDE:APNF"
MX30_B_BUS_STROBO_OFF = "VDE:BSROF"
MX30_B_BUS_MOSAIC_OFF = "VDE:BMSOF"
MX30_B_BUS_PAINT_OFF = "VDE:BPNF"

MX30_A_BUS_NEGATIVE_OFF = "VDE:ANGF"
MX30_A_BUS_NEGATIVE_ON = "VDE:ANGN"
MX30_B_BUS_NEGATIVE_OFF = "VDE:BNGF"
MX30_B_BUS_NEGATIVE_ON = "VDE:BNGN"

MX30_COLOR_CORRECT_X = "VCC:T~f*g"
MX30_COLOR_CORRECT_Y = "VCC:T*f~g"
MX30_COLOR_CORRECT_GAIN = "VCG:T~0"

MX30_A_BUS_COLOR_CORRECT_OFF = "VCC:AOF"
MX30_B_BUS_COLOR_CORRECT_OFF = "VCC:BOF"
MX30_A_BUS_COLOR_CORRECT_ON = "VCC:A*f*g"
MX30_B_BUS_COLOR_CORRECT_ON = "VCC:B*f*g"

MX30_A_BUS_EFFECT_ON = "VDE:AON"
MX30_A_BUS_EFFECT_OFF = "VDE:AOF"
MX30_B_BUS_EFFECT_ON = "VDE:BON"
MX30_B_BUS_EFFECT_OFF = "VDE:BOF"

MX30_A_BUS_SOURCE_1 = "VCP:A1"
MX30_A_BUS_SOURCE_2 = "VCP:A2"
MX30_A_BUS_SOURCE_3 = "VCP:A3"
MX30_A_BUS_SOURCE_4 = "VCP:A4"
MX30_A_BUS_BACK_COLOR = "VCP:AB"
MX30_B_BUS_SOURCE_1 = "VCP:B1"
MX30_B_BUS_SOURCE_2 = "VCP:B2"
MX30_B_BUS_SOURCE_3 = "VCP:B3"
MX30_B_BUS_SOURCE_4 = "VCP:B4"
MX30_B_BUS_BACK_COLOR = "VCP:BB"


def frame_command(command: str) -> bytes:
    """Wrap a command string in STX/ETX as the mixer expects it on the wire."""
    return bytes([STX]) + command.encode("ascii") + bytes([ETX])


def _hex2(value: int) -> str:
    return f"{value:02X}"[:2]


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in 0..255, got {value}")


def _overwrite_placeholders(chars: list[str], digits: str) -> None:
    """Write ``digits`` over every ``~`` found in the scanned prefix."""
    for i in range(min(_SCAN_LIMIT, len(chars))):
        if chars[i] == "~":
            chars[i : i + len(digits)] = digits


class CommandBuilder:
    """Holds the pending mixer command together with switch and parameter memory."""

    def __init__(self) -> None:
        self.command = ""
        self._switches = [0] * SWITCH_SLOTS
        self._params: dict[str, int] = {}

    @staticmethod
    def _load(template: str) -> list[str]:
        if len(template) > MAX_COMMAND_LENGTH:
            raise ValueError(
                f"command {template!r} is longer than {MAX_COMMAND_LENGTH} characters"
            )
        if not template.isascii():
            raise ValueError(f"command {template!r} is not ASCII")
        return list(template)

    def _finish(self, chars: list[str]) -> str:
        if len(chars) > MAX_COMMAND_LENGTH:
            raise ValueError(f"command grew beyond {MAX_COMMAND_LENGTH} characters")
        self.command = "".join(chars)
        return self.command

    def _check_index(self, index: int) -> None:
        if not 0 <= index < SWITCH_SLOTS:
            raise IndexError(f"switch index must be in 0..{SWITCH_SLOTS - 1}, got {index}")

    def set(self, template: str, param: int = 0) -> str:
        """Fill the ``~x`` and ``*x`` placeholders of ``template`` with ``param``."""
        _check_byte("param", param)
        chars = self._load(template)
        value = param * 2
        for i in range(min(_SCAN_LIMIT, len(chars) - 1)):
            here, name = chars[i], chars[i + 1]
            if here == "~":
                if name != "0":
                    self._params[name] = value & 0xFF
                chars[i : i + 2] = _hex2(value)
            elif here == "*":
                chars[i : i + 2] = _hex2(self._params.get(name, 0))
        return self._finish(chars)

    def set_no_replace(self, template: str) -> str:
        """Take ``template`` as the command verbatim."""
        return self._finish(self._load(template))

    def set_switch(self, first: str, second: str, index: int) -> str:
        """Alternate between two commands on successive calls for one switch slot."""
        self._check_index(index)
        self.set(first if self._switches[index] == 0 else second)
        self._switches[index] = (self._switches[index] + 1) % 2
        return self.command

    def set_step(self, template: str, param: int, max_value: int) -> str:
        """Scale a 0..127 ``param`` to ``0..max_value`` and write it in hex at ``~``."""
        _check_byte("param", param)
        _check_byte("max_value", max_value)
        chars = self._load(template)
        width = len(f"{max_value + 1:X}")
        value = param * max_value // 128
        digits = f"{value:02X}" if width == 2 else f"{value:X}"
        _overwrite_placeholders(chars, digits)
        if len(chars) > MAX_COMMAND_LENGTH:
            raise ValueError(f"command grew beyond {MAX_COMMAND_LENGTH} characters")
        return self.set("".join(chars))

    def set_toggle(self, template: str, max_value: int, index: int) -> str:
        """Write the slot's counter in decimal at ``~`` and advance it modulo ``max_value``."""
        self._check_index(index)
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        chars = self._load(template)
        _overwrite_placeholders(chars, f"{self._switches[index]:02d}")
        self._finish(chars)
        self._switches[index] = (self._switches[index] + 1) % max_value
        return self.command

    def take(self) -> str:
        """Return the pending command and clear it."""
        command, self.command = self.command, ""
        return command

    def send(self, port: BinaryIO) -> bytes:
        """Write the pending command, framed, to ``port`` and clear it.

        Returns the bytes written; nothing is written when no command is pending.
        """
        if not self.command:
            return b""
        frame = frame_command(self.command)
        port.write(frame)
        log.debug("Sent to RS232C port: %s", self.command)
        self.command = ""
        return frame