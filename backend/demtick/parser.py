# parser.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from demtick.demo_header_parser import DemoHeader, DemoHeaderParser
from demtick.demo_packet_parser import ConsoleCommand, DemoPacketParser, StopReason
from demtick.demo_reader import DemoReader
from demtick.exceptions import DemoParserException

logger = logging.getLogger(__name__)


class DemoParser:
    """Decodes a demo buffer once and remembers the highest tick seen.

    The header's own tick and frame counts are informational; the tick
    count returned by ``parse()`` always comes from walking the stream.
    """

    def __init__(self, data: bytes):
        self.reader = DemoReader(data)
        self._header: Optional[DemoHeader] = None
        self._console_commands: List[ConsoleCommand] = []
        self._stop_reason: Optional[StopReason] = None
        self.ticks: Optional[int] = None
        logger.debug(f"Initialized parser for {len(self.reader.data)} bytes")

    @classmethod
    def from_file(cls, demo_path: str | Path) -> 'DemoParser':
        """Load a whole demo file into memory"""
        path = Path(demo_path)
        if not path.exists():
            raise FileNotFoundError(f"Demo file not found: {path}")
        logger.info(f"Loading demo {path}")
        return cls(path.read_bytes())

    def parse(self) -> int:
        """Return the highest tick recorded in the demo.

        Only the first successful call reads the buffer. A failed call caches
        nothing and the next call decodes again from offset 0.
        """
        if self.ticks is not None:
            return self.ticks

        # Always decode from the start, also after an earlier failed attempt
        self.reader.pos = 0
        try:
            header = DemoHeaderParser(self.reader).parse()
            packet_parser = DemoPacketParser(self.reader, header)
            result = packet_parser.process_commands()
        except DemoParserException as e:
            logger.error(f"Error parsing demo: {e}")
            raise

        self._header = header
        self._console_commands = packet_parser.console_commands
        self._stop_reason = result.stop_reason
        self.ticks = result.ticks
        return self.ticks

    def _require_parsed(self) -> None:
        if self.ticks is None:
            raise DemoParserException("Demo has not been parsed yet")

    @property
    def header(self) -> DemoHeader:
        self._require_parsed()
        return self._header

    @property
    def console_commands(self) -> Tuple[ConsoleCommand, ...]:
        self._require_parsed()
        return tuple(self._console_commands)

    @property
    def stop_reason(self) -> StopReason:
        self._require_parsed()
        return self._stop_reason

    def to_dict(self) -> Dict[str, Any]:
        """Parse if needed and summarize the result for serialization"""
        ticks = self.parse()
        return {
            'ticks': ticks,
            'stop_reason': self._stop_reason.value,
            'header': self._header.to_dict(),
            'console_commands': [
                {'tick': cmd.tick, 'command': cmd.command.rstrip('\0')}
                for cmd in self._console_commands
            ],
        }
