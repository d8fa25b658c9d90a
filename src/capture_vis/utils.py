import pandas as pd
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional, Sequence

TIME_COLUMN = "time_s"


def load_capture_csv(csv_path: str, channels: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Load a converted capture CSV into a DataFrame.

    Args:
        csv_path (str): Path to a CSV written by siglent_converter.
        channels (Sequence[str]): Channel column names. Defaults to CH1..CHn.

    Returns:
        pd.DataFrame: time_s column followed by one column per channel.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file {csv_path} does not exist.")

    df = pd.read_csv(csv_path, header=None, skipinitialspace=True)
    n = df.shape[1] - 1
    if channels is None:
        channels = [f"CH{i + 1}" for i in range(n)]
    if len(channels) != n:
        raise ValueError(f"CSV file {csv_path} has {n} channel columns, got {len(channels)} names.")

    df.columns = [TIME_COLUMN, *channels]
    return df


def bin_capture(csv_path: str, bin_size: str = '1ms', channels: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Bin a capture into fixed time intervals, averaging each channel per bin.

    Args:
        csv_path (str): Path to a converted capture CSV.
        bin_size (str): pandas offset alias for the bin width (e.g., '1ms', '10us').

    Returns:
        pd.DataFrame: Mean channel values per bin, with time_s at the bin start.
    """
    df = load_capture_csv(csv_path, channels)
    df['timestamp'] = pd.to_timedelta(df[TIME_COLUMN], unit='s')
    df.set_index('timestamp', inplace=True)

    binned_df = df.drop(columns=[TIME_COLUMN]).resample(bin_size).mean().reset_index()
    binned_df[TIME_COLUMN] = binned_df['timestamp'].dt.total_seconds()
    return binned_df.drop(columns=['timestamp'])[[TIME_COLUMN, *df.columns.drop(TIME_COLUMN)]]


def plot_capture(csv_path: str, channels: Optional[Sequence[str]] = None, bin_size: Optional[str] = None) -> None:
    """
    Plot every channel of a converted capture against time.

    Args:
        csv_path (str): Path to a converted capture CSV.
        channels (Sequence[str]): Channel column names. Defaults to CH1..CHn.
        bin_size (str): Average into bins of this width first (e.g., '1ms').
    """
    if bin_size:
        df = bin_capture(csv_path, bin_size, channels)
    else:
        df = load_capture_csv(csv_path, channels)

    channel_columns = [c for c in df.columns if c != TIME_COLUMN]
    n = len(channel_columns)

    fig, axes = plt.subplots(n, 1, figsize=(16, 3 * n), sharex=True)
    if n == 1:
        axes = [axes]

    for ax, channel in zip(axes, channel_columns):
        ax.plot(df[TIME_COLUMN], df[channel])
        ax.set_title(channel if not bin_size else f"{channel} (Bin Size: {bin_size})")
        ax.set_ylabel("Volts")
        ax.grid()

    axes[-1].set_xlabel("Time (s)")
    plt.tight_layout()
    plt.show()
