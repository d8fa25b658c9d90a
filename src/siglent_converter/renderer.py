"""
Fixed-width CSV row rendering.

Every row of a capture has the same byte width, so the output buffer can be
sized up front and split between workers by row index.
"""

from typing import Dict, Sequence, Tuple

from .errors import ChannelCountUnsupported, RowRenderOverflow
from .models import RowLayout

MAX_CHANNELS = 4

TIMESTAMP_FORMAT = "{: .11f}"
VALUE_FORMAT = "{: 6f}"

# Bytes per row (newline included) by enabled channel count
ROW_WIDTHS: Dict[RowLayout, Dict[int, int]] = {
    RowLayout.REFERENCE: {1: 27, 2: 35, 3: 43, 4: 51},
    # 17-byte timestamp field, 13-byte value fields
    RowLayout.WIDE: {1: 32, 2: 46, 3: 60, 4: 74},
}

ROW_FORMATS: Dict[int, str] = {
    count: ",".join([TIMESTAMP_FORMAT] + [VALUE_FORMAT] * count)
    for count in range(1, MAX_CHANNELS + 1)
}


def row_width(channel_count: int, layout: RowLayout = RowLayout.REFERENCE) -> int:
    """Return the byte width of one row for the given channel count."""
    try:
        return ROW_WIDTHS[RowLayout(layout)][channel_count]
    except KeyError:
        raise ChannelCountUnsupported(channel_count) from None


def format_row(timestamp: float, values: Sequence[float]) -> str:
    """Format a row's fields without padding or line terminator."""
    try:
        row_format = ROW_FORMATS[len(values)]
    except KeyError:
        raise ChannelCountUnsupported(len(values)) from None
    return row_format.format(timestamp, *values)


def _fit(text: str, body: int, width: int, strict: bool) -> Tuple[str, bool]:
    if len(text) == body:
        return text, False
    if len(text) < body:
        return text.ljust(body), False
    if strict:
        raise RowRenderOverflow(text, width)
    return text[:body], True


def render_row(out, timestamp: float, values: Sequence[float], strict: bool = False) -> bool:
    """
    Render one row into a writable byte region.

    The text is space-padded to fill out, and the last byte is always a
    newline. Text too long for out is cut to fit unless strict is set.

    Args:
        out: Writable region (bytearray slice or memoryview) of the row width
        timestamp: Sample time in seconds
        values: One scaled value per enabled channel
        strict: Raise instead of truncating rows that do not fit

    Returns:
        True if the row was truncated

    Raises:
        ChannelCountUnsupported: values is empty or has more than 4 entries
        RowRenderOverflow: the row does not fit and strict is set
    """
    text, truncated = _fit(format_row(timestamp, values), len(out) - 1, len(out), strict)
    out[:] = text.encode("ascii") + b"\n"
    return truncated


def render_rows(
    timestamps: Sequence[float],
    columns: Sequence[Sequence[float]],
    width: int,
    strict: bool = False,
) -> Tuple[bytes, int]:
    """
    Render consecutive rows as one block of text.

    Each row is laid out exactly as render_row would write it, so the block is
    len(timestamps) * width bytes and can be copied into the output with a
    single slice assignment.

    Args:
        timestamps: Sample times in seconds
        columns: One sequence of scaled values per enabled channel
        width: Bytes per row, newline included
        strict: Raise instead of truncating rows that do not fit

    Returns:
        Tuple of (rendered bytes, number of truncated rows)
    """
    try:
        row_format = ROW_FORMATS[len(columns)].format
    except KeyError:
        raise ChannelCountUnsupported(len(columns)) from None

    body = width - 1
    lines = []
    truncated = 0
    for timestamp, *values in zip(timestamps, *columns):
        text = row_format(timestamp, *values)
        if len(text) != body:
            text, cut = _fit(text, body, width, strict)
            truncated += cut
        lines.append(text)

    if not lines:
        return b"", 0
    return ("\n".join(lines) + "\n").encode("ascii"), truncated
