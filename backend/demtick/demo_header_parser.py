# demo_header_parser.py

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict

from demtick.demo_reader import DemoReader, hexdump

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class DemoHeader:
    """
    HL2DEMO file header.
    References:
    - https://developer.valvesoftware.com/wiki/DEM_Format
    - String fields are 260 chars for backward compatibility
    """

    MAGIC_SIZE: ClassVar[int] = 8
    STRING_LENGTH: ClassVar[int] = 260
    HEADER_SIZE: ClassVar[int] = 8 + 4 + 4 + 4 * 260 + 4 + 4 + 4 + 4  # 1076

    magic: str
    demo_protocol: int
    network_protocol: int
    server_name: str
    client_name: str
    map_name: str
    game_directory: str
    playback_time: float
    playback_ticks: int
    playback_frames: int
    signon_length: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert header to a dictionary, with text fields trimmed for display"""
        return {
            'magic': _trim(self.magic),
            'demo_protocol': self.demo_protocol,
            'network_protocol': self.network_protocol,
            'server_name': _trim(self.server_name),
            'client_name': _trim(self.client_name),
            'map_name': _trim(self.map_name),
            'game_directory': _trim(self.game_directory),
            'playback_time': self.playback_time,
            'playback_ticks': self.playback_ticks,
            'playback_frames': self.playback_frames,
            'signon_length': self.signon_length,
        }

    def __str__(self) -> str:
        return (
            f"Demo ({_trim(self.magic)}, protocol {self.demo_protocol}/{self.network_protocol})\n"
            f"Map: {_trim(self.map_name)}\n"
            f"Server: {_trim(self.server_name)}\n"
            f"Client: {_trim(self.client_name)}\n"
            f"Game: {_trim(self.game_directory)}\n"
            f"Duration: {self.playback_time:.2f}s\n"
            f"Ticks: {self.playback_ticks} (frames: {self.playback_frames})"
        )


def _trim(value: str) -> str:
    # Fixed-width fields are NUL padded, anything after the first NUL is garbage
    return value.split('\0', 1)[0]


class DemoHeaderParser:
    """Reads the fixed-layout preamble of a demo file"""

    def __init__(self, reader: DemoReader):
        self.reader = reader
        self.header = None

    def parse(self) -> DemoHeader:
        """Parse the demo header. No field is validated."""
        start = self.reader.tell()
        logger.debug("Header dump:\n" + hexdump(self.reader.data[start:start + 64], start))

        read_string = self.reader.read_string
        read_int32 = self.reader.read_int32

        # Field order is fixed; keyword arguments evaluate left to right
        self.header = DemoHeader(
            magic=read_string(DemoHeader.MAGIC_SIZE),
            demo_protocol=read_int32(),
            network_protocol=read_int32(),
            server_name=read_string(DemoHeader.STRING_LENGTH),
            client_name=read_string(DemoHeader.STRING_LENGTH),
            map_name=read_string(DemoHeader.STRING_LENGTH),
            game_directory=read_string(DemoHeader.STRING_LENGTH),
            playback_time=self.reader.read_float32(),
            playback_ticks=read_int32(),
            playback_frames=read_int32(),
            signon_length=read_int32(),
        )

        logger.info(
            f"Parsed header: magic={_trim(self.header.magic)!r}, "
            f"map={_trim(self.header.map_name)!r}, signon={self.header.signon_length}"
        )
        return self.header
