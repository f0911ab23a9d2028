import pytest

from demo_builder import build_header


@pytest.fixture
def header_bytes():
    return build_header(
        magic="HL2DEMO",
        server_name="Valve Server",
        client_name="player",
        map_name="de_dust2",
        game_directory="csgo",
        playback_time=12.5,
        playback_ticks=1600,
        playback_frames=800,
        signon_length=16,
    )
