"""
Pydantic models for Siglent capture metadata and conversion settings.

Defines the decoded header (input), the derived scaling model, and the
settings and result of a conversion (output).
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .units import magnitude_prefix, unit_name

# Vertical ADC code steps spanning one division (SDS1000X-E family)
CODE_PER_DIV = 25.0

DEFAULT_WORKER_COUNT = 8

MAX_WORKER_COUNT = 64

CHANNEL_NAMES = ("CH1", "CH2", "CH3", "CH4")


class RowLayout(str, Enum):
    """Fixed row width tables for the CSV output."""
    REFERENCE = "reference"
    WIDE = "wide"


class OverflowPolicy(str, Enum):
    """What to do when a row does not fit its fixed width."""
    TRUNCATE = "truncate"
    ERROR = "error"


# ==================== Capture Models (Input) ====================


class Quantity(BaseModel):
    """A "data with unit" record: value plus magnitude and unit codes."""
    model_config = ConfigDict(frozen=True)

    value: float = Field(description="Raw value as stored by the instrument")
    magnitude: int = Field(description="SI magnitude code (8 = no prefix)")
    unit: int = Field(description="Instrument unit code")

    def describe(self) -> str:
        """Format as e.g. "500.000000 mV"."""
        return f"{self.value:f} {magnitude_prefix(self.magnitude)}{unit_name(self.unit)}"


class CaptureDescription(BaseModel):
    """
    Everything the converter needs from a capture header.

    Decoded once from the raw file and shared read-only by all workers.
    Vertical offsets and the time delay are kept for display only; they are
    not applied to rendered values.
    """
    model_config = ConfigDict(frozen=True)

    channel_enabled: Tuple[bool, bool, bool, bool] = Field(
        description="Analog channel on/off flags, CH1..CH4"
    )
    channel_volts_per_division: Tuple[Quantity, Quantity, Quantity, Quantity] = Field(
        description="Vertical scale per channel"
    )
    channel_vertical_offset: Tuple[Quantity, Quantity, Quantity, Quantity] = Field(
        description="Vertical offset per channel (display only)"
    )
    time_per_division: Quantity = Field(description="Horizontal scale")
    time_delay: Quantity = Field(description="Trigger delay (display only)")
    sample_rate: Quantity = Field(description="Samples per second")
    sample_count: int = Field(ge=0, description="Samples per channel (wave length)")
    channel_data_offset: Tuple[Optional[int], Optional[int], Optional[int], Optional[int]] = Field(
        description="Byte offset of each enabled channel's sample block"
    )

    @property
    def enabled_channels(self) -> List[int]:
        """Zero-based indices of enabled channels, in channel order."""
        return [i for i, on in enumerate(self.channel_enabled) if on]

    @property
    def enabled_channel_count(self) -> int:
        return sum(self.channel_enabled)

    @property
    def data_size(self) -> int:
        """Bytes of sample data following the header."""
        return self.sample_count * self.enabled_channel_count

    @property
    def channel_names(self) -> List[str]:
        return [CHANNEL_NAMES[i] for i in self.enabled_channels]


class ScalingModel(BaseModel):
    """Linear mappings from sample index and ADC code to physical units."""
    model_config = ConfigDict(frozen=True)

    channel_scale: Tuple[float, float, float, float] = Field(
        description="Base units per ADC code step, CH1..CH4"
    )
    time_offset: float = Field(description="Time of the sample before the first one, in seconds")
    time_step: float = Field(description="Seconds between samples")


# ==================== Conversion Models (Output) ====================


class ConversionSettings(BaseModel):
    """Tunable parameters of a conversion."""
    codes_per_division: float = Field(
        default=CODE_PER_DIV, gt=0, description="ADC code steps per vertical division"
    )
    worker_count: int = Field(
        default=DEFAULT_WORKER_COUNT,
        ge=1,
        le=MAX_WORKER_COUNT,
        description="Parallel conversion workers"
    )
    layout: RowLayout = Field(default=RowLayout.REFERENCE, description="Row width table")
    on_overflow: OverflowPolicy = Field(
        default=OverflowPolicy.TRUNCATE,
        description="Truncate rows that do not fit, or abort the conversion",
    )


class ConversionResult(BaseModel):
    """Converted CSV text together with the metadata it was derived from."""
    model_config = ConfigDict(frozen=True)

    description: CaptureDescription
    scaling: ScalingModel
    row_width: int = Field(description="Bytes per CSV row, newline included")
    truncated_rows: int = Field(default=0, description="Rows cut to fit their width")
    data: bytes = Field(repr=False, description="CSV text")

    @property
    def row_count(self) -> int:
        return len(self.data) // self.row_width
