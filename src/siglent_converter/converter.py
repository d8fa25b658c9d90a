"""
Parallel converter from Siglent waveform captures to CSV.

Splits the sample range into contiguous chunks, renders each chunk on its own
worker into a disjoint slice of one pre-sized buffer, and writes the buffer
out in a single operation once every worker has finished.
"""

import logging
import os
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np

from . import scaling
from .decoder import HEADER_SIZE, channel_blocks, decode
from .errors import ConversionError, InputTooSmall, WorkerFailed
from .models import (
    MAX_WORKER_COUNT,
    CaptureDescription,
    ConversionResult,
    ConversionSettings,
    OverflowPolicy,
    ScalingModel,
)
from .renderer import render_rows, row_width

logger = logging.getLogger(__name__)

# ADC code for zero volts
CODE_ZERO = 128

# ==================== Work Partitioning ====================


def partition(sample_count: int, worker_count: int) -> List[Tuple[int, int]]:
    """
    Split [0, sample_count) into contiguous chunks, one per worker.

    All chunks have sample_count // workers samples except the last, which
    takes the remainder. There are never more chunks than samples.

    Args:
        sample_count: Number of samples to convert
        worker_count: Maximum number of chunks

    Returns:
        List of (start, stop) index pairs in ascending order
    """
    if sample_count <= 0:
        return []
    workers = max(1, min(worker_count, sample_count))
    size = sample_count // workers
    ranges = []
    for n in range(workers):
        start = n * size
        stop = sample_count if n == workers - 1 else start + size
        ranges.append((start, stop))
    return ranges


# ==================== Conversion Workers ====================


def _convert_chunk(
    start: int,
    stop: int,
    description: CaptureDescription,
    model: ScalingModel,
    blocks: Sequence[np.ndarray],
    out: memoryview,
    width: int,
    strict: bool,
) -> int:
    """Render samples [start, stop) into their rows of out. Returns truncated row count."""
    with np.errstate(invalid="ignore", over="ignore"):
        timestamps = model.time_offset + np.arange(start + 1, stop + 1, dtype=np.float64) * model.time_step
        columns = [
            (block[start:stop].astype(np.int32) - CODE_ZERO) * model.channel_scale[index]
            for index, block in zip(description.enabled_channels, blocks)
        ]

    text, truncated = render_rows(
        timestamps.tolist(), [column.tolist() for column in columns], width, strict
    )
    out[start * width:stop * width] = text
    return truncated


def convert(
    description: CaptureDescription,
    model: ScalingModel,
    blocks: Sequence[np.ndarray],
    out: bytearray,
    worker_count: int,
    strict: bool = False,
) -> int:
    """
    Render every sample of a capture into out, in parallel.

    Row i always lands at out[i * width:(i + 1) * width], whichever worker
    renders it. Returns only after all workers have finished; a failure in any
    worker is raised after the others have been joined.

    Args:
        description: Decoded capture header
        model: Scaling derived from description
        blocks: ADC codes per enabled channel, in channel order
        out: Buffer of exactly sample_count * row width bytes
        worker_count: Maximum number of parallel workers (capped at MAX_WORKER_COUNT)
        strict: Raise RowRenderOverflow instead of truncating rows

    Returns:
        Number of rows that were truncated to fit
    """
    count = description.sample_count
    width = len(out) // count if count else 0
    if width * count != len(out):
        raise ValueError(
            f"Output buffer of {len(out)} bytes does not hold {count} rows"
        )
    if len(blocks) != description.enabled_channel_count:
        raise ValueError(
            f"Expected {description.enabled_channel_count} channel blocks, got {len(blocks)}"
        )

    chunks = partition(count, min(worker_count, MAX_WORKER_COUNT))
    if not chunks:
        return 0

    view = memoryview(out)
    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = [
            executor.submit(_convert_chunk, start, stop, description, model, blocks, view, width, strict)
            for start, stop in chunks
        ]
        wait(futures)

    truncated = 0
    for (start, stop), future in zip(chunks, futures):
        error = future.exception()
        if error is None:
            truncated += future.result()
        elif isinstance(error, ConversionError):
            raise error
        else:
            logger.error("Worker for samples [%d, %d) failed: %r", start, stop, error)
            raise WorkerFailed(start, stop, error) from error
    return truncated


# ==================== Main Conversion Functions ====================


def convert_capture(raw, settings: Optional[ConversionSettings] = None) -> ConversionResult:
    """
    Convert an in-memory capture to CSV text.

    Args:
        raw: Complete capture file contents
        settings: Conversion settings (defaults apply when omitted)

    Returns:
        ConversionResult holding the CSV bytes and decoded metadata
    """
    settings = settings or ConversionSettings()

    description = decode(raw)
    model = scaling.build(description, settings.codes_per_division)
    width = row_width(description.enabled_channel_count, settings.layout)
    blocks = channel_blocks(raw, description)
    out = bytearray(description.sample_count * width)

    started = time.perf_counter()
    truncated = convert(
        description,
        model,
        blocks,
        out,
        settings.worker_count,
        strict=settings.on_overflow == OverflowPolicy.ERROR,
    )
    logger.info("CSV data export took %f seconds", time.perf_counter() - started)

    if truncated:
        logger.warning(
            "%d of %d rows did not fit in %d bytes and were truncated",
            truncated,
            description.sample_count,
            width,
        )

    return ConversionResult(
        description=description,
        scaling=model,
        row_width=width,
        truncated_rows=truncated,
        data=bytes(out),
    )


def load_capture(input_path: Path) -> bytes:
    """
    Read a capture file, rejecting files shorter than the header.

    Args:
        input_path: Path to the .bin capture

    Returns:
        File contents
    """
    input_path = Path(input_path)
    size = input_path.stat().st_size
    if size < HEADER_SIZE:
        raise InputTooSmall(size, HEADER_SIZE)
    return input_path.read_bytes()


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def write_csv(output_path: Path, data: bytes) -> None:
    """
    Write converted CSV text in one operation.

    The data goes to a temporary file next to output_path, which is given the
    usual permissions for a new file and then renamed over output_path. A
    failed write leaves any existing output_path untouched.

    Args:
        output_path: Destination CSV path
        data: CSV text
    """
    output_path = Path(output_path)

    started = time.perf_counter()
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{output_path.name}.", suffix=".tmp", dir=output_path.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600 files
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("CSV data write took %f seconds", time.perf_counter() - started)


def convert_file(
    input_path: Path,
    output_path: Path,
    settings: Optional[ConversionSettings] = None,
) -> ConversionResult:
    """
    Convert a capture file to a CSV file.

    The CSV is written to a temporary file next to output_path and moved over
    it only after conversion succeeded, so a failed run leaves no output.

    Args:
        input_path: Path to the .bin capture
        output_path: Destination CSV path
        settings: Conversion settings (defaults apply when omitted)

    Returns:
        ConversionResult of the conversion
    """
    raw = load_capture(input_path)
    result = convert_capture(raw, settings)
    write_csv(output_path, result.data)
    return result
