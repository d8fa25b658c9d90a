"""
Pytest fixtures for siglent_converter tests.

Provides synthetic Siglent waveform captures built with struct.
"""

import struct
from typing import Dict, Optional

import pytest

HEADER_SIZE = 0x800
CH_ON_OFFSETS = (0x00, 0x04, 0x08, 0x0C)
VOLT_DIV_OFFSETS = (0x10, 0x38, 0x60, 0x88)
VERT_OFFSET_OFFSETS = (0xB0, 0xD8, 0x100, 0x128)
TIME_DIV_OFFSET = 0x194
TIME_DELAY_OFFSET = 0x1BC
WAVE_LENGTH_OFFSET = 0x1E4
SAMPLE_RATE_OFFSET = 0x1E8

NO_PREFIX = 8
MILLI = 7
VOLT = 0
SECOND = 14
HERTZ = 13


def build_capture(
    channels: Dict[int, bytes],
    volts_per_div: float = 1.0,
    volts_magnitude: int = NO_PREFIX,
    vert_offset: float = 0.0,
    time_div: float = 1e-6,
    sample_rate: float = 1e9,
    wave_length: Optional[int] = None,
    enabled: Optional[Dict[int, bool]] = None,
) -> bytes:
    """
    Build a capture file.

    channels maps 1-based channel numbers to their ADC codes. All channels share
    the same settings; wave_length defaults to the length of the code blocks.
    """
    header = bytearray(HEADER_SIZE)
    if wave_length is None:
        wave_length = len(next(iter(channels.values()))) if channels else 0
    enabled = enabled if enabled is not None else {n: True for n in channels}

    for n in range(1, 5):
        struct.pack_into("<i", header, CH_ON_OFFSETS[n - 1], 1 if enabled.get(n) else 0)
        struct.pack_into("<d I I", header, VOLT_DIV_OFFSETS[n - 1], volts_per_div, volts_magnitude, VOLT)
        struct.pack_into("<d I I", header, VERT_OFFSET_OFFSETS[n - 1], vert_offset, NO_PREFIX, VOLT)

    struct.pack_into("<d I I", header, TIME_DIV_OFFSET, time_div, NO_PREFIX, SECOND)
    struct.pack_into("<d I I", header, TIME_DELAY_OFFSET, 0.0, NO_PREFIX, SECOND)
    struct.pack_into("<I", header, WAVE_LENGTH_OFFSET, wave_length)
    struct.pack_into("<d I I", header, SAMPLE_RATE_OFFSET, sample_rate, NO_PREFIX, HERTZ)

    data = b"".join(channels[n] for n in sorted(channels))
    return bytes(header) + data


@pytest.fixture
def capture_builder():
    """Return the capture factory for tests that need custom headers."""
    return build_capture


@pytest.fixture
def two_channel_capture() -> bytes:
    """CH1 and CH2 at 1 V/div, 1 us/div, 1 GSa/s, four samples each."""
    return build_capture({
        1: bytes([128, 153, 103, 178]),
        2: bytes([128, 128, 140, 116]),
    })


@pytest.fixture
def long_capture() -> bytes:
    """All four channels with 1000 samples of varied codes at 100 mV/div."""
    return build_capture(
        {n: bytes((i * 7 + n * 31) % 256 for i in range(1000)) for n in range(1, 5)},
        volts_per_div=100.0,
        volts_magnitude=MILLI,
    )


@pytest.fixture
def capture_file(tmp_path, two_channel_capture):
    """Write the two-channel capture to disk."""
    path = tmp_path / "usr_wf_data.bin"
    path.write_bytes(two_channel_capture)
    return path


@pytest.fixture
def empty_header_file(tmp_path):
    """A full-size header with no channel enabled."""
    path = tmp_path / "no_channels.bin"
    path.write_bytes(build_capture({}))
    return path
