import pytest

from mxmidibridge import mappings
from mxmidibridge.commands import (
    MX30_A_B_MIX_LEVEL,
    MX30_A_BUS_SOURCE_1,
    MX30_A_BUS_SOURCE_2,
    MX30_THRESHOLD_LUM_KEY,
    CommandBuilder,
)


@pytest.mark.parametrize(
    "note, expected",
    [(54, MX30_A_BUS_SOURCE_1), (55, MX30_A_BUS_SOURCE_2)],
)
def test_note_on_selects_source(note, expected):
    builder = CommandBuilder()
    mappings.test_map(builder, 0x90, 1, note, 100)
    assert builder.command == expected


def test_note_on_with_zero_velocity_does_nothing():
    builder = CommandBuilder()
    mappings.test_map(builder, 0x90, 1, 54, 0)
    assert builder.command == ""


def test_unmapped_note_does_nothing():
    builder = CommandBuilder()
    mappings.test_map(builder, 0x90, 1, 60, 100)
    assert builder.command == ""


@pytest.mark.parametrize(
    "control, template",
    [(0, MX30_A_B_MIX_LEVEL), (1, MX30_THRESHOLD_LUM_KEY)],
)
@pytest.mark.parametrize("value", [0, 1, 63, 127])
def test_control_change_sets_parameter_command(control, template, value):
    builder = CommandBuilder()
    mappings.test_map(builder, 0xB0, 1, control, value)
    assert builder.command == CommandBuilder().set(template, value)


def test_unmapped_control_change_does_nothing():
    builder = CommandBuilder()
    mappings.test_map(builder, 0xB0, 1, 7, 100)
    assert builder.command == ""


def test_program_change_does_nothing():
    builder = CommandBuilder()
    mappings.test_map(builder, 0xC0, 1, 5, 0)
    assert builder.command == ""


def test_channel_is_ignored():
    builder = CommandBuilder()
    mappings.test_map(builder, 0x90, 16, 54, 1)
    assert builder.command == MX30_A_BUS_SOURCE_1