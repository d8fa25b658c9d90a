from .utils import (
    load_capture_csv,
    bin_capture,
    plot_capture,
)

__version__ = "0.1.0"
__all__ = [
    "load_capture_csv",
    "bin_capture",
    "plot_capture",
]
