import logging
import struct

import pytest

from demo_builder import (
    build_header,
    console_cmd,
    data_tables,
    packet,
    signon,
    stop,
    string_tables,
    sync_tick,
    user_cmd,
)
from demtick.demo_header_parser import DemoHeader, DemoHeaderParser
from demtick.demo_packet_parser import ConsoleCommand, DemoCommand, DemoPacketParser, StopReason
from demtick.demo_reader import DemoReader
from demtick.exceptions import InvalidSignonLength, UnexpectedEndOfData, UnrecognizedTag


def run(stream: bytes, signon_length: int = 0):
    reader = DemoReader(build_header(signon_length=signon_length) + stream)
    header = DemoHeaderParser(reader).parse()
    parser = DemoPacketParser(reader, header)
    return parser, parser.process_commands()


def test_command_tags_are_closed():
    assert [c.value for c in DemoCommand] == list(range(1, 9))
    assert DemoCommand.from_tag(7, 0) is DemoCommand.STOP
    with pytest.raises(UnrecognizedTag):
        DemoCommand.from_tag(0, 0)

    parser, _ = run(stop())
    assert set(parser._command_handlers) == set(DemoCommand)


def test_every_record_type_before_stop():
    stream = (
        signon(32)
        + packet(1, b'\x01' * 10)
        + sync_tick(2)
        + console_cmd(3, "sv_cheats 1")
        + user_cmd(4, b'\x02' * 6)
        + string_tables(5, b'\x03' * 3)
        + stop()
    )
    parser, result = run(stream, signon_length=32)

    assert result.ticks == 5
    assert result.stop_reason is StopReason.STOP
    assert result.commands_read == 7
    assert parser.console_commands == [ConsoleCommand(3, "sv_cheats 1")]
    assert parser.reader.tell() == DemoHeader.HEADER_SIZE + len(stream)


def test_last_tick_carrying_record_wins():
    _, result = run(packet(10) + user_cmd(20) + sync_tick(30) + stop())
    assert result.ticks == 30


def test_stop_without_records_is_tick_zero():
    _, result = run(stop())
    assert result.ticks == 0
    assert result.stop_reason is StopReason.STOP


def test_signon_seeks_by_length_minus_one():
    # A signon of length 5 leaves 4 bytes after the tag to jump over
    _, result = run(b'\x01' + b'\x07\x07\x07\x07' + sync_tick(9) + stop(), signon_length=5)
    assert result.ticks == 9


@pytest.mark.parametrize("signon_length", [0, -5])
def test_signon_that_does_not_advance_is_rejected(signon_length):
    with pytest.raises(InvalidSignonLength) as excinfo:
        run(sync_tick(3) + b'\x01' + stop(), signon_length=signon_length)
    assert excinfo.value.offset == DemoHeader.HEADER_SIZE + 5
    assert excinfo.value.signon_length == signon_length


def test_signon_of_length_one_has_no_payload():
    _, result = run(signon(1) + sync_tick(4) + stop(), signon_length=1)
    assert result.ticks == 4


def test_data_tables_stop_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        _, result = run(sync_tick(12) + data_tables() + b'garbage')
    assert result.ticks == 12
    assert result.stop_reason is StopReason.UNIMPLEMENTED
    assert "dem_datatables unimplemented" in caplog.text


def test_regression_keeps_higher_tick():
    parser, result = run(sync_tick(100) + sync_tick(50) + sync_tick(200) + stop())
    assert result.ticks == 100
    assert result.stop_reason is StopReason.REGRESSION
    # The tag that tripped the guard was consumed but not processed
    assert parser.pending_tick == 50


def test_regression_checked_before_tag_is_resolved():
    _, result = run(sync_tick(100) + sync_tick(50) + b'\x09')
    assert result.stop_reason is StopReason.REGRESSION
    assert result.ticks == 100


def test_equal_ticks_are_not_a_regression():
    _, result = run(sync_tick(7) + packet(7) + stop())
    assert result.ticks == 7
    assert result.stop_reason is StopReason.STOP


def test_unknown_tag_reports_its_offset():
    stream = sync_tick(5) + b'\x09' + stop()
    with pytest.raises(UnrecognizedTag) as excinfo:
        run(stream)
    assert excinfo.value.tag == 9
    assert excinfo.value.offset == DemoHeader.HEADER_SIZE + 5


def test_truncated_packet_payload_raises():
    with pytest.raises(UnexpectedEndOfData):
        run(packet(10, b'abc', declared_size=100) + stop())


def test_missing_stop_raises():
    with pytest.raises(UnexpectedEndOfData):
        run(sync_tick(1) + sync_tick(2))


def test_truncated_console_command_raises():
    record = console_cmd(4, "say hello")
    with pytest.raises(UnexpectedEndOfData):
        run(record[:-3])


@pytest.mark.parametrize("record", [
    b'\x02' + struct.pack('<i', 1) + b'\0' * 84 + struct.pack('<i', -1),
    b'\x04' + struct.pack('<ii', 1, -1),
    b'\x05' + struct.pack('<i', 1) + b'\0' * 4 + struct.pack('<i', -1),
    b'\x08' + struct.pack('<ii', 1, -1),
], ids=["packet", "consolecmd", "usercmd", "stringtables"])
def test_negative_payload_length_is_end_of_data(record):
    with pytest.raises(UnexpectedEndOfData) as excinfo:
        run(record + stop())
    assert excinfo.value.wanted == -1
