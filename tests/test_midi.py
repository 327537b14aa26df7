import pytest

from mxmidibridge.midi import DinParser, MessageKind, MidiMessage


def test_encode_note_on():
    message = MidiMessage(MessageKind.NOTE_ON, 1, 60, 100)
    assert message.encode() == bytes([0x90, 60, 100])


def test_encode_channel_sixteen_status():
    message = MidiMessage(MessageKind.CONTROL_CHANGE, 16, 7, 1)
    assert message.encode()[0] & 0xF0 == 0xB0
    assert message.encode()[0] & 0x0F == 15


@pytest.mark.parametrize("kind", [MessageKind.PROGRAM_CHANGE, MessageKind.CHANNEL_AFTERTOUCH])
def test_single_data_kinds_encode_two_bytes(kind):
    encoded = MidiMessage(kind, 3, 42).encode()
    assert len(encoded) == 2
    assert encoded[0] == kind | 2
    assert encoded[1] == 42


@pytest.mark.parametrize("value", [0, 1, 127, 128, 8192, 16383])
def test_pitch_bend_round_trip(value):
    message = MidiMessage.pitch_bend(5, value)
    assert message.pitch == value
    assert DinParser().feed(message.encode()) == [message]


def test_pitch_bend_pinned_bytes():
    assert MidiMessage.pitch_bend(1, 8192).encode() == bytes([0xE0, 0, 64])


def test_pitch_on_other_kind_raises():
    with pytest.raises(ValueError):
        MidiMessage(MessageKind.NOTE_ON, 1, 60, 100).pitch


@pytest.mark.parametrize("channel", [0, 17])
def test_invalid_channel_rejected(channel):
    with pytest.raises(ValueError):
        MidiMessage(MessageKind.NOTE_ON, channel, 60, 100)


def test_invalid_data_rejected():
    with pytest.raises(ValueError):
        MidiMessage(MessageKind.NOTE_ON, 1, 128, 100)


def test_invalid_pitch_rejected():
    with pytest.raises(ValueError):
        MidiMessage.pitch_bend(1, 16384)


MESSAGES = [
    MidiMessage(MessageKind.NOTE_OFF, 1, 60, 0),
    MidiMessage(MessageKind.NOTE_ON, 2, 61, 90),
    MidiMessage(MessageKind.POLY_AFTERTOUCH, 3, 62, 10),
    MidiMessage(MessageKind.CONTROL_CHANGE, 16, 1, 127),
    MidiMessage(MessageKind.PROGRAM_CHANGE, 10, 5),
    MidiMessage(MessageKind.CHANNEL_AFTERTOUCH, 9, 77),
    MidiMessage(MessageKind.PITCH_BEND, 4, 3, 99),
]


@pytest.mark.parametrize("message", MESSAGES)
def test_parser_round_trip(message):
    assert DinParser().feed(message.encode()) == [message]


def test_parser_stream_of_messages():
    stream = b"".join(m.encode() for m in MESSAGES)
    assert DinParser().feed(stream) == MESSAGES


def test_parser_keeps_state_between_feeds():
    parser = DinParser()
    encoded = MESSAGES[1].encode()
    assert parser.feed(encoded[:1]) == []
    assert parser.feed(encoded[1:2]) == []
    assert parser.feed(encoded[2:]) == [MESSAGES[1]]


def test_parser_ignores_data_without_status():
    assert DinParser().feed(bytes([60, 100, 5])) == []


def test_parser_has_no_running_status():
    parser = DinParser()
    first = MidiMessage(MessageKind.NOTE_ON, 1, 60, 100)
    assert parser.feed(first.encode() + bytes([62, 100])) == [first]


def test_parser_skips_system_messages():
    parser = DinParser()
    message = MidiMessage(MessageKind.CONTROL_CHANGE, 1, 0, 64)
    assert parser.feed(bytes([0xF2, 1, 2]) + message.encode()) == [message]


def test_new_status_interrupts_partial_message():
    parser = DinParser()
    program = MidiMessage(MessageKind.PROGRAM_CHANGE, 1, 5)
    assert parser.feed(bytes([0x90, 60]) + program.encode()) == [program]


@pytest.mark.parametrize("kind", list(MessageKind))
def test_encoded_length_matches_data_length(kind):
    encoded = MidiMessage(kind, 1, 1).encode()
    assert len(encoded) == 1 + kind.data_length


def test_data_lengths():
    one_byte = [kind for kind in MessageKind if len(MidiMessage(kind, 1, 1).encode()) == 2]
    assert sorted(one_byte) == sorted(
        [MessageKind.PROGRAM_CHANGE, MessageKind.CHANNEL_AFTERTOUCH]
    )
    assert len(MidiMessage(MessageKind.PROGRAM_CHANGE, 1, 1).encode()) == 2
    assert len(MidiMessage.pitch_bend(1, 0).encode()) == 3