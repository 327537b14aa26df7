"""MIDI channel messages and a byte-stream parser for the 5-pin DIN input."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable


class MessageKind(IntEnum):
    """Channel message kinds, valued by their status nibble."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_AFTERTOUCH = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_AFTERTOUCH = 0xD0
    PITCH_BEND = 0xE0

    @property
    def data_length(self) -> int:
        """Number of data bytes that follow the status byte."""
        if self in (MessageKind.PROGRAM_CHANGE, MessageKind.CHANNEL_AFTERTOUCH):
            return 1
        return 2


@dataclass(frozen=True)
class MidiMessage:
    """A channel message; ``channel`` counts from 1 to 16."""

    kind: MessageKind
    channel: int
    data1: int
    data2: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.channel <= 16:
            raise ValueError(f"channel must be in 1..16, got {self.channel}")
        for name in ("data1", "data2"):
            value = getattr(self, name)
            if not 0 <= value <= 0x7F:
                raise ValueError(f"{name} must be in 0..127, got {value}")

    @classmethod
    def pitch_bend(cls, channel: int, value: int) -> MidiMessage:
        """Build a pitch bend message from a 14-bit value."""
        if not 0 <= value <= 0x3FFF:
            raise ValueError(f"pitch bend must be in 0..16383, got {value}")
        return cls(MessageKind.PITCH_BEND, channel, value & 0x7F, (value >> 7) & 0x7F)

    @property
    def pitch(self) -> int:
        """The 14-bit pitch bend value."""
        if self.kind is not MessageKind.PITCH_BEND:
            raise ValueError(f"{self.kind.name} message carries no pitch bend")
        return (self.data2 << 7) | self.data1

    def encode(self) -> bytes:
        """The message as it is sent on a MIDI wire."""
        status = self.kind | ((self.channel - 1) & 0x0F)
        if self.kind.data_length == 1:
            return bytes([status, self.data1])
        return bytes([status, self.data1, self.data2])


class _State(Enum):
    IDLE = 0
    FIRST_OF_TWO = 1
    ONLY_ONE = 2
    SECOND_OF_TWO = 3


_KINDS = {kind.value: kind for kind in MessageKind}


class DinParser:
    """Turns a raw MIDI byte stream into messages.

    Running status is not supported: every message needs its own status byte.
    Bytes from system messages are consumed without producing anything.
    """

    def __init__(self) -> None:
        self._state = _State.IDLE
        self._command = 0
        self._channel = 0
        self._data1 = 0

    def feed(self, data: Iterable[int]) -> list[MidiMessage]:
        """Consume ``data`` and return the messages it completes."""
        messages: list[MidiMessage] = []
        for byte in data:
            if byte & 0x80:
                self._command = byte & 0xF0
                self._channel = byte & 0x0F
                if self._command in (MessageKind.PROGRAM_CHANGE, MessageKind.CHANNEL_AFTERTOUCH):
                    self._state = _State.ONLY_ONE
                else:
                    self._state = _State.FIRST_OF_TWO
            elif self._state is _State.FIRST_OF_TWO:
                self._data1 = byte
                self._state = _State.SECOND_OF_TWO
            elif self._state is _State.ONLY_ONE:
                messages.append(MidiMessage(_KINDS[self._command], self._channel + 1, byte))
                self._state = _State.IDLE
            elif self._state is _State.SECOND_OF_TWO:
                kind = _KINDS.get(self._command)
                if kind is not None:
                    messages.append(MidiMessage(kind, self._channel + 1, self._data1, byte))
                self._state = _State.IDLE
        return messages