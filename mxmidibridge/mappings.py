"""Mappings from incoming MIDI messages to mixer commands."""

from __future__ import annotations

from .commands import (
    MX30_A_B_MIX_LEVEL,
    MX30_A_BUS_SOURCE_1,
    MX30_A_BUS_SOURCE_2,
    MX30_THRESHOLD_LUM_KEY,
    CommandBuilder,
)

NOTE_ON = 0x90
CONTROL_CHANGE = 0xB0


def test_map(builder: CommandBuilder, status: int, channel: int, param1: int, param2: int) -> None:
    """Example video mixer mapping: notes pick A-bus sources, CCs drive levels."""
    if status == NOTE_ON:
        if param2 == 0:
            return
        if param1 == 54:
            builder.set_no_replace(MX30_A_BUS_SOURCE_1)
        elif param1 == 55:
            builder.set_no_replace(MX30_A_BUS_SOURCE_2)
    elif status == CONTROL_CHANGE:
        if param1 == 0:
            builder.set(MX30_A_B_MIX_LEVEL, param2)
        elif param1 == 1:
            builder.set(MX30_THRESHOLD_LUM_KEY, param2)


test_map.__test__ = False  # type: ignore[attr-defined]