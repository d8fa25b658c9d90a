"""
Command-line interface for Siglent Converter.

Usage:
    python -m siglent_converter convert usr_wf_data.bin csv_data.csv
    python -m siglent_converter info usr_wf_data.bin
    python -m siglent_converter format-info
"""

import logging
from pathlib import Path

import typer

from .converter import convert_capture, load_capture, write_csv
from .decoder import (
    ANALOG_DATA_OFFSET,
    DATA_WITH_UNIT_SIZE,
    HEADER_SIZE,
    OFFSET_TO_CH_ON,
    OFFSET_TO_SAMPLE_RATE,
    OFFSET_TO_TIME_DELAY,
    OFFSET_TO_TIME_DIV,
    OFFSET_TO_VERT_OFFSET,
    OFFSET_TO_VOLT_DIV_VAL,
    OFFSET_TO_WAVE_LENGTH,
    decode,
)
from .errors import ConversionError
from .models import (
    CHANNEL_NAMES,
    CODE_PER_DIV,
    DEFAULT_WORKER_COUNT,
    MAX_WORKER_COUNT,
    CaptureDescription,
    ConversionSettings,
    OverflowPolicy,
    RowLayout,
)
from .renderer import ROW_WIDTHS

app = typer.Typer(
    name="siglent-converter",
    help="Siglent oscilloscope waveform binary to CSV converter",
    add_completion=False,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def _fail(error: Exception) -> None:
    typer.echo(typer.style(f"Error: {error}", fg=typer.colors.RED), err=True)
    raise typer.Exit(1)


def _echo_channels(description: CaptureDescription) -> None:
    typer.echo(
        f"Sample rate (if no units are shown, defaults to Hertz): {description.sample_rate.describe()}"
    )
    typer.echo("Channels (if no units are shown, defaults to Volts):")
    for index in description.enabled_channels:
        typer.echo(
            f"{CHANNEL_NAMES[index]} - Vertical offset "
            f"{description.channel_vertical_offset[index].describe()}"
        )


@app.command()
def convert(
    input_file: Path = typer.Argument(
        ...,
        help=".bin file of waveform data downloaded from the \"Waveform Save\" button on the oscilloscope's Web UI",
        exists=True,
        dir_okay=False,
        file_okay=True,
    ),
    output_file: Path = typer.Argument(
        Path("csv_data.csv"),
        help="Destination CSV file",
        dir_okay=False,
    ),
    workers: int = typer.Option(
        DEFAULT_WORKER_COUNT,
        "--workers", "-w",
        min=1,
        max=MAX_WORKER_COUNT,
        help="Number of parallel conversion workers",
    ),
    codes_per_div: float = typer.Option(
        CODE_PER_DIV,
        "--codes-per-div",
        help="ADC code steps per vertical division",
    ),
    layout: RowLayout = typer.Option(
        RowLayout.REFERENCE,
        "--layout",
        help="Row width table (use 'wide' for large values)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail instead of truncating rows that do not fit their width",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Print verbose output",
    ),
):
    """
    Convert a waveform capture to CSV.

    Writes one row per sample: time in seconds, then one value per enabled
    analog channel.
    """
    _configure_logging(verbose)
    try:
        settings = ConversionSettings(
            codes_per_division=codes_per_div,
            worker_count=workers,
            layout=layout,
            on_overflow=OverflowPolicy.ERROR if strict else OverflowPolicy.TRUNCATE,
        )
        raw = load_capture(input_file)
        _echo_channels(decode(raw))
        result = convert_capture(raw, settings)
        write_csv(output_file, result.data)
    except (ConversionError, ValueError, OSError) as e:
        _fail(e)

    typer.echo(f"Wrote {result.row_count} rows to {output_file}")
    if result.truncated_rows:
        typer.echo(typer.style(
            f"  WARNING: {result.truncated_rows} rows were truncated to {result.row_width} bytes "
            "(use --layout wide or --strict)",
            fg=typer.colors.YELLOW,
        ))


@app.command()
def info(
    input_file: Path = typer.Argument(
        ...,
        help="Waveform capture to inspect",
        exists=True,
        dir_okay=False,
        file_okay=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Print verbose output",
    ),
):
    """
    Display the metadata of a capture without converting it.
    """
    _configure_logging(verbose)
    try:
        description = decode(load_capture(input_file))
    except (ConversionError, OSError) as e:
        _fail(e)

    typer.echo(f"Capture: {input_file}")
    typer.echo(f"  Samples per channel: {description.sample_count}")
    typer.echo(f"  Time/div: {description.time_per_division.describe()}")
    typer.echo(f"  Time delay: {description.time_delay.describe()}")
    _echo_channels(description)
    for index in description.enabled_channels:
        typer.echo(
            f"{CHANNEL_NAMES[index]} - Volts/div "
            f"{description.channel_volts_per_division[index].describe()}"
        )


@app.command("format-info")
def format_info():
    """
    Display binary format information.
    """
    typer.echo("Siglent waveform binary format (little-endian):")
    typer.echo("")
    typer.echo(f"Header: {HEADER_SIZE} bytes")
    typer.echo(f"  Channel on flags (int32): {', '.join(hex(o) for o in OFFSET_TO_CH_ON)}")
    typer.echo(f"  Volts/div (data with unit): {', '.join(hex(o) for o in OFFSET_TO_VOLT_DIV_VAL)}")
    typer.echo(f"  Vertical offset (data with unit): {', '.join(hex(o) for o in OFFSET_TO_VERT_OFFSET)}")
    typer.echo(f"  Time/div (data with unit): {hex(OFFSET_TO_TIME_DIV)}")
    typer.echo(f"  Time delay (data with unit): {hex(OFFSET_TO_TIME_DELAY)}")
    typer.echo(f"  Wave length (uint32): {hex(OFFSET_TO_WAVE_LENGTH)}")
    typer.echo(f"  Sample rate (data with unit): {hex(OFFSET_TO_SAMPLE_RATE)}")
    typer.echo("")
    typer.echo(f"Data with unit: {DATA_WITH_UNIT_SIZE} bytes")
    typer.echo("  Fields: value (float64), magnitude (uint32), unit (uint32), reserved[24]")
    typer.echo("")
    typer.echo(f"Analog data: from {hex(ANALOG_DATA_OFFSET)}")
    typer.echo("  One block of wave length uint8 codes per enabled channel, CH1..CH4")
    typer.echo("")
    typer.echo("CSV row widths (bytes per row for 1..4 channels):")
    for row_layout, widths in ROW_WIDTHS.items():
        typer.echo(f"  {row_layout.value}: {'/'.join(str(w) for w in widths.values())}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
