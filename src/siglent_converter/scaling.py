"""Scaling from ADC codes and sample indices to volts and seconds."""

import numpy as np

from .models import CaptureDescription, ScalingModel
from .units import unit_divider

# The screen spans 14 horizontal divisions centred on the trigger
HORIZONTAL_DIVISIONS = 14.0


def build(description: CaptureDescription, codes_per_division: float) -> ScalingModel:
    """
    Derive per-channel and time scaling from a decoded header.

    Zero sample rates or dividers follow IEEE rules (inf/nan) instead of
    raising; valid captures never contain them.

    Args:
        description: Decoded capture header
        codes_per_division: ADC code steps per vertical division

    Returns:
        ScalingModel shared by every conversion worker
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        channel_scale = tuple(
            float(np.float64(vdiv.value) / unit_divider(vdiv.magnitude) / np.float64(codes_per_division))
            for vdiv in description.channel_volts_per_division
        )
        time_step = float(np.float64(1.0) / np.float64(description.sample_rate.value))

    time_offset = -(description.time_per_division.value * HORIZONTAL_DIVISIONS / 2.0)
    return ScalingModel(
        channel_scale=channel_scale,
        time_offset=time_offset,
        time_step=time_step,
    )
