"""Bridge between MIDI input and a video mixer's RS-232C control port.

Every MIDI message that arrives is echoed to the MIDI outputs. Note on,
control change and program change messages also pass through a mapping that
may build a mixer command, and that command is then sent to the mixer.
"""

from __future__ import annotations

import argparse
import logging
import time
from contextlib import ExitStack
from typing import BinaryIO, Callable, Iterable, Sequence

from .commands import CommandBuilder
from .mappings import test_map
from .midi import DinParser, MessageKind, MidiMessage

log = logging.getLogger(__name__)

Mapping = Callable[[CommandBuilder, int, int, int, int], None]

MIXER_BAUDRATE = 9600
MIDI_BAUDRATE = 31250

_MAPPED_KINDS = frozenset(
    {MessageKind.NOTE_ON, MessageKind.CONTROL_CHANGE, MessageKind.PROGRAM_CHANGE}
)


def _describe(message: MidiMessage) -> str:
    ch = message.channel
    kind = message.kind
    if kind is MessageKind.NOTE_ON:
        return f"Note On | ch: {ch} note: {message.data1} vel: {message.data2}"
    if kind is MessageKind.NOTE_OFF:
        return f"Note Off | ch: {ch} note: {message.data1} vel: {message.data2}"
    if kind is MessageKind.CONTROL_CHANGE:
        return f"Control Change | ch: {ch} cc: {message.data1} val: {message.data2}"
    if kind is MessageKind.PROGRAM_CHANGE:
        return f"Program Change | ch: {ch} program: {message.data1}"
    if kind is MessageKind.POLY_AFTERTOUCH:
        return f"Poly Aftertouch | ch: {ch} note: {message.data1} val: {message.data2}"
    if kind is MessageKind.CHANNEL_AFTERTOUCH:
        return f"Channel Aftertouch | ch: {ch} pressure: {message.data1}"
    return f"Pitch Bend | ch: {ch} value: {message.pitch}"


class Bridge:
    """Routes MIDI messages to MIDI outputs and, through a mapping, to the mixer."""

    def __init__(
        self,
        mixer: BinaryIO,
        midi_in: BinaryIO | None = None,
        midi_outputs: Iterable[BinaryIO] = (),
        mapping: Mapping = test_map,
    ) -> None:
        self.mixer = mixer
        self.midi_in = midi_in
        self.midi_outputs = list(midi_outputs)
        self.mapping = mapping
        self.builder = CommandBuilder()
        self._parser = DinParser()

    def handle(self, message: MidiMessage) -> bytes:
        """Echo ``message``, run the mapping for it and send any command built.

        Returns the bytes written to the mixer.
        """
        log.debug(_describe(message))
        wire = message.encode()
        for output in self.midi_outputs:
            output.write(wire)
        if message.kind not in _MAPPED_KINDS:
            return b""
        data2 = 0 if message.kind is MessageKind.PROGRAM_CHANGE else message.data2
        self.mapping(self.builder, int(message.kind), message.channel, message.data1, data2)
        return self.builder.send(self.mixer)

    def _read_available(self) -> bytes:
        if self.midi_in is None:
            return b""
        waiting = getattr(self.midi_in, "in_waiting", None)
        if waiting is None:
            return self.midi_in.read() or b""
        if not waiting:
            return b""
        return self.midi_in.read(waiting) or b""

    def poll(self) -> list[MidiMessage]:
        """Read what the MIDI input has ready and handle every complete message."""
        messages = self._parser.feed(self._read_available())
        for message in messages:
            self.handle(message)
        return messages


def _open_serial(path: str, baudrate: int, **settings):
    import serial

    return serial.Serial(path, baudrate, timeout=0, **settings)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bridge until interrupted."""
    parser = argparse.ArgumentParser(
        prog="mxmidibridge",
        description="Drive a video mixer over RS-232C from MIDI input.",
    )
    parser.add_argument("mixer", help="serial device of the mixer's RS-232C port")
    parser.add_argument("--midi-in", help="serial device carrying 5-pin MIDI input")
    parser.add_argument("--midi-out", help="serial device for 5-pin MIDI output")
    parser.add_argument("--quiet", action="store_true", help="turn debug output off")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.DEBUG,
        format="%(message)s",
    )

    import serial

    with ExitStack() as stack:
        mixer = stack.enter_context(
            _open_serial(
                args.mixer,
                MIXER_BAUDRATE,
                bytesize=serial.SEVENBITS,
                parity=serial.PARITY_ODD,
                stopbits=serial.STOPBITS_ONE,
            )
        )
        midi_in = midi_out = None
        if args.midi_in:
            midi_in = stack.enter_context(_open_serial(args.midi_in, MIDI_BAUDRATE))
        if args.midi_out:
            if args.midi_out == args.midi_in:
                midi_out = midi_in
            else:
                midi_out = stack.enter_context(_open_serial(args.midi_out, MIDI_BAUDRATE))

        bridge = Bridge(mixer, midi_in, [midi_out] if midi_out is not None else [])
        log.debug("Setup complete, debug mode ON")
        try:
            while True:
                if not bridge.poll():
                    time.sleep(0.001)
        except KeyboardInterrupt:
            return 0