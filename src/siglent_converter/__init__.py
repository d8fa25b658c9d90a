"""
Siglent Converter - Oscilloscope Waveform Binary to CSV Converter

Decodes Siglent "Waveform Save" binary captures and renders every sample as a
fixed-width CSV row, using a pool of parallel workers.
"""

from .models import (
    RowLayout,
    OverflowPolicy,
    Quantity,
    CaptureDescription,
    ScalingModel,
    ConversionSettings,
    ConversionResult,
)
from .errors import (
    ConversionError,
    InputTooSmall,
    NoChannelsEnabled,
    InputTruncated,
    ChannelCountUnsupported,
    RowRenderOverflow,
    WorkerFailed,
)
from .decoder import decode, channel_blocks
from .renderer import render_row, render_rows, row_width
from .converter import (
    partition,
    convert,
    convert_capture,
    convert_file,
    write_csv,
)

__version__ = "0.1.0"
__all__ = [
    "RowLayout",
    "OverflowPolicy",
    "Quantity",
    "CaptureDescription",
    "ScalingModel",
    "ConversionSettings",
    "ConversionResult",
    "ConversionError",
    "InputTooSmall",
    "NoChannelsEnabled",
    "InputTruncated",
    "ChannelCountUnsupported",
    "RowRenderOverflow",
    "WorkerFailed",
    "decode",
    "channel_blocks",
    "render_row",
    "render_rows",
    "row_width",
    "partition",
    "convert",
    "convert_capture",
    "convert_file",
    "write_csv",
]
