# demo_packet_parser.py

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, List, NamedTuple, Optional

from demtick.demo_header_parser import DemoHeader
from demtick.demo_reader import DemoReader
from demtick.exceptions import InvalidSignonLength, UnrecognizedTag

logger = logging.getLogger(__name__)


class DemoCommand(IntEnum):
    """HL2DEMO command tags"""
    SIGNON = 1
    PACKET = 2
    SYNCTICK = 3
    CONSOLECMD = 4
    USERCMD = 5
    DATATABLES = 6
    STOP = 7
    STRINGTABLES = 8

    @classmethod
    def from_tag(cls, tag: int, offset: int) -> 'DemoCommand':
        """Resolve a tag byte; anything outside 1-8 is fatal"""
        try:
            return cls(tag)
        except ValueError:
            raise UnrecognizedTag(tag, offset) from None


class StopReason(Enum):
    STOP = "stop"
    UNIMPLEMENTED = "unimplemented"
    REGRESSION = "regression"


class ConsoleCommand(NamedTuple):
    tick: int
    command: str


@dataclass
class EngineResult:
    """Outcome of one pass over the command stream"""
    ticks: int
    stop_reason: StopReason
    commands_read: int


class DemoPacketParser:
    """Walks the command stream that follows the header, tracking ticks"""

    # Fixed-size fields skipped in front of a packet payload
    PACKET_FLAGS_SIZE = 4
    PACKET_CMD_INFO_SIZE = 12 + 68
    USERCMD_SEQUENCE_SIZE = 4

    def __init__(self, reader: DemoReader, header: DemoHeader):
        self.reader = reader
        self.header = header
        self.console_commands: List[ConsoleCommand] = []

        # Tick carried by the most recent record, applied on the next iteration
        self.pending_tick: int = 0
        self.last_recorded_tick: Optional[int] = None
        self._stop_reason: Optional[StopReason] = None

        self._command_handlers: Dict[DemoCommand, Callable[[], None]] = {
            DemoCommand.SIGNON: self._handle_signon,
            DemoCommand.PACKET: self._handle_packet,
            DemoCommand.SYNCTICK: self._handle_sync_tick,
            DemoCommand.CONSOLECMD: self._handle_console_cmd,
            DemoCommand.USERCMD: self._handle_user_cmd,
            DemoCommand.DATATABLES: self._handle_data_tables,
            DemoCommand.STOP: self._handle_stop,
            DemoCommand.STRINGTABLES: self._handle_string_tables,
        }

    def process_commands(self) -> EngineResult:
        """Process records until a stop condition; read errors propagate"""
        commands_read = 0
        logger.debug(f"Starting command processing at offset {self.reader.tell()}")

        while self._stop_reason is None:
            offset = self.reader.tell()
            tag = self.reader.read_byte()

            # Trailing check against the tick of the previous record
            if self.last_recorded_tick is not None and self.pending_tick < self.last_recorded_tick:
                logger.warning(
                    f"Tick went backwards ({self.last_recorded_tick} -> {self.pending_tick}) "
                    f"before offset {offset}, stopping"
                )
                self._stop_reason = StopReason.REGRESSION
                break
            self.last_recorded_tick = self.pending_tick

            command = DemoCommand.from_tag(tag, offset)
            logger.debug(f"{command.name} at offset {offset}")
            self._command_handlers[command]()
            commands_read += 1

        logger.info(
            f"Finished processing {commands_read} commands: "
            f"ticks={self.last_recorded_tick}, reason={self._stop_reason.value}"
        )
        return EngineResult(
            ticks=self.last_recorded_tick,
            stop_reason=self._stop_reason,
            commands_read=commands_read,
        )

    def _read_tick(self) -> None:
        self.pending_tick = self.reader.read_int32()

    def _skip_payload(self) -> None:
        size = self.reader.read_int32()
        self.reader.skip(size)

    def _handle_signon(self) -> None:
        # The tag byte counts towards the signon length
        if self.header.signon_length < 1:
            raise InvalidSignonLength(self.header.signon_length, self.reader.tell() - 1)
        self.reader.seek_relative(self.header.signon_length - 1)

    def _handle_packet(self) -> None:
        self._read_tick()
        self.reader.skip(self.PACKET_FLAGS_SIZE)
        self.reader.skip(self.PACKET_CMD_INFO_SIZE)
        self._skip_payload()

    def _handle_sync_tick(self) -> None:
        self._read_tick()

    def _handle_console_cmd(self) -> None:
        self._read_tick()
        size = self.reader.read_int32()
        command = self.reader.read_string(size)
        self.console_commands.append(ConsoleCommand(self.pending_tick, command))
        logger.debug(f"Console command at tick {self.pending_tick}: {command!r}")

    def _handle_user_cmd(self) -> None:
        self._read_tick()
        self.reader.skip(self.USERCMD_SEQUENCE_SIZE)
        self._skip_payload()

    def _handle_data_tables(self) -> None:
        logger.warning("Command 6: dem_datatables unimplemented, stopping")
        self._stop_reason = StopReason.UNIMPLEMENTED

    def _handle_stop(self) -> None:
        logger.info("Reached dem_stop command")
        self._stop_reason = StopReason.STOP

    def _handle_string_tables(self) -> None:
        self._read_tick()
        self._skip_payload()
