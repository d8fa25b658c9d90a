"""
Decoder for the Siglent waveform binary header.

The header is a fixed 2 KiB block of little-endian fields, followed by one
block of 8-bit ADC codes per enabled analog channel, in channel order.
"""

import logging
import struct
from typing import List, Optional

import numpy as np

from .errors import InputTooSmall, InputTruncated, NoChannelsEnabled
from .models import CaptureDescription, Quantity

logger = logging.getLogger(__name__)

# ==================== Binary Layout ====================

HEADER_SIZE = 0x800
ANALOG_DATA_OFFSET = 0x800

OFFSET_TO_CH_ON = (0x00, 0x04, 0x08, 0x0C)
OFFSET_TO_VOLT_DIV_VAL = (0x10, 0x38, 0x60, 0x88)
OFFSET_TO_VERT_OFFSET = (0xB0, 0xD8, 0x100, 0x128)
OFFSET_TO_TIME_DIV = 0x194
OFFSET_TO_TIME_DELAY = 0x1BC
OFFSET_TO_WAVE_LENGTH = 0x1E4
OFFSET_TO_SAMPLE_RATE = 0x1E8

# int32 flag, uint32 count
CHANNEL_ON_FORMAT = "<i"
WAVE_LENGTH_FORMAT = "<I"

# Data with unit: float64 value, uint32 magnitude, uint32 unit, then 24 bytes
# of unit exponents this converter does not use
DATA_WITH_UNIT_FORMAT = "<d I I 24x"
DATA_WITH_UNIT_SIZE = struct.calcsize(DATA_WITH_UNIT_FORMAT)  # Should be 40 bytes

# ==================== Field Readers ====================


def _read_quantity(raw, offset: int) -> Quantity:
    value, magnitude, unit = struct.unpack_from(DATA_WITH_UNIT_FORMAT, raw, offset)
    return Quantity(value=value, magnitude=magnitude, unit=unit)


def _read_channel_on(raw, offset: int) -> bool:
    return struct.unpack_from(CHANNEL_ON_FORMAT, raw, offset)[0] != 0


# ==================== Decoder ====================


def decode(raw) -> CaptureDescription:
    """
    Decode a capture header and locate each enabled channel's sample block.

    Args:
        raw: The complete file contents (bytes, bytearray or memoryview)

    Returns:
        Decoded CaptureDescription

    Raises:
        InputTooSmall: raw is shorter than the header
        NoChannelsEnabled: no analog channel is flagged on
        InputTruncated: raw is too short for the announced sample data
    """
    if len(raw) < HEADER_SIZE:
        raise InputTooSmall(len(raw), HEADER_SIZE)

    channel_enabled = tuple(_read_channel_on(raw, off) for off in OFFSET_TO_CH_ON)
    volts_per_division = tuple(_read_quantity(raw, off) for off in OFFSET_TO_VOLT_DIV_VAL)
    vertical_offset = tuple(_read_quantity(raw, off) for off in OFFSET_TO_VERT_OFFSET)
    time_per_division = _read_quantity(raw, OFFSET_TO_TIME_DIV)
    time_delay = _read_quantity(raw, OFFSET_TO_TIME_DELAY)
    (sample_count,) = struct.unpack_from(WAVE_LENGTH_FORMAT, raw, OFFSET_TO_WAVE_LENGTH)
    sample_rate = _read_quantity(raw, OFFSET_TO_SAMPLE_RATE)

    # Disabled channels take no space in the data area
    channel_data_offset: List[Optional[int]] = []
    next_offset = ANALOG_DATA_OFFSET
    for on in channel_enabled:
        if on:
            channel_data_offset.append(next_offset)
            next_offset += sample_count
        else:
            channel_data_offset.append(None)

    if not any(channel_enabled):
        raise NoChannelsEnabled()

    description = CaptureDescription(
        channel_enabled=channel_enabled,
        channel_volts_per_division=volts_per_division,
        channel_vertical_offset=vertical_offset,
        time_per_division=time_per_division,
        time_delay=time_delay,
        sample_rate=sample_rate,
        sample_count=sample_count,
        channel_data_offset=tuple(channel_data_offset),
    )
    expected = ANALOG_DATA_OFFSET + description.data_size
    if len(raw) < expected:
        raise InputTruncated(len(raw), expected)

    logger.debug(
        "Decoded capture: channels=%s, samples=%d, sample_rate=%s",
        description.channel_names,
        sample_count,
        sample_rate.describe(),
    )
    return description


def channel_blocks(raw, description: CaptureDescription) -> List[np.ndarray]:
    """
    Return read-only views of each enabled channel's ADC codes.

    Args:
        raw: The buffer description was decoded from
        description: Decoded capture header

    Returns:
        One uint8 array of sample_count codes per enabled channel, in channel order
    """
    blocks = []
    for index in description.enabled_channels:
        start = description.channel_data_offset[index]
        block = np.frombuffer(raw, dtype=np.uint8, count=description.sample_count, offset=start)
        block.flags.writeable = False
        blocks.append(block)
    return blocks
