# mxmidibridge

mxmidibridge turns incoming MIDI into RS-232C control commands for Panasonic
MX-series video mixers (MX30/50/70). Every MIDI message it handles is also
echoed to the configured MIDI outputs, so the bridge can sit inline in an
existing MIDI chain.

## Installation

```
pip install mxmidibridge
```

To run the test suite, install the `test` extra:

```
pip install "mxmidibridge[test]"
```

## Running the bridge

```
mxmidibridge MIXER_PORT [--midi-in PORT] [--midi-out PORT] [--quiet]
```

- `MIXER_PORT` is the serial device of the mixer's RS-232C port. It is opened
  at 9600 baud, 7 data bits, odd parity and 1 stop bit.
- `--midi-in` is a serial device carrying raw 5-pin DIN MIDI, opened at
  31250 baud.
- `--midi-out` is a serial device that every received message is echoed to.
  It may be the same device as `--midi-in`.
- `--quiet` turns the debug output off. By default every message received and
  every command sent is logged.

The bridge runs until interrupted with Ctrl-C. Without `--midi-in` it has
nothing to read and stays idle.

## How commands are built

Mixer commands are short ASCII templates, for example `VMM:~0` for the A/B mix
level. The constants in `mxmidibridge.commands` (`MX30_A_B_MIX_LEVEL`,
`MX30_A_BUS_SOURCE_1` and so on) hold the known templates. A
`CommandBuilder` fills in their placeholders:

- `~0` takes the parameter, doubled and written as two hex digits.
- `~x`, where `x` is any other character, does the same. It also stores the
  value under `x` for later commands.
- `*x` is replaced with the value last stored under `x` (`00` if none).

```python
from mxmidibridge.commands import CommandBuilder, frame_command

builder = CommandBuilder()
builder.set("VMM:~0", 64)
print(builder.take())           # VMM:80
print(frame_command("VCP:A1"))  # b'\x02VCP:A1\x03'
```

The builder has more methods:

- `set_switch(first, second, index)` alternates between two commands on
  successive calls for one of 20 switch slots.
- `set_step(template, param, max_value)` scales a 0–127 value onto
  `0..max_value` and writes it in hex at `~`.
- `set_toggle(template, max_value, index)` writes a slot's counter in decimal
  at `~` and advances it modulo `max_value`.
- `set_no_replace(template)` stores a command as it is.
- `take()` returns the pending command and clears it.
- `send(port)` writes the STX/ETX-framed command to a port, clears it and
  returns the bytes written (nothing is written when no command is pending).

Commands are limited to 13 characters; longer ones raise `ValueError`.

## Mappings

`mxmidibridge.mappings.test_map` is the example mapping:

- Note 54 (note on, velocity above 0) selects source 1 on the A bus.
- Note 55 selects source 2 on the A bus.
- Controller 0 drives the A/B mix level.
- Controller 1 drives the luminance-key threshold.

A mapping is a function `mapping(builder, status, channel, param1, param2)`
that may leave a command in the builder. Pass your own to `Bridge` through its
`mapping` argument. Only note on, control change and program change messages
go through the mapping; for program change `param2` is 0.

## Using the bridge from Python

```python
from mxmidibridge.bridge import Bridge
from mxmidibridge.midi import MessageKind, MidiMessage

bridge = Bridge(mixer_port, midi_in=din_port, midi_outputs=[out_port])
bridge.handle(MidiMessage(MessageKind.CONTROL_CHANGE, 1, 0, 64))
bridge.poll()  # read what the MIDI input has ready and handle it
```

`handle` returns the bytes sent to the mixer; `poll` returns the messages it
handled.

## Parsing DIN MIDI

`mxmidibridge.midi.DinParser` turns raw MIDI bytes into `MidiMessage` values.
Its `feed` method accepts bytes and returns a list of the messages they
complete; partial messages carry over to the next call. Running status is not
supported, and system messages are ignored. `MidiMessage.encode` turns a
message back into bytes, and `MidiMessage.pitch_bend` and `.pitch` convert
14-bit pitch bend values.

## What it does not do

The bridge reads MIDI only from a serial port carrying 5-pin DIN MIDI. It does
not act as a USB MIDI host or device and does not open system MIDI ports.