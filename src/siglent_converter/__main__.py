"""
Entry point for running siglent_converter as a module.

Usage:
    python -m siglent_converter convert usr_wf_data.bin csv_data.csv
    python -m siglent_converter info usr_wf_data.bin
    python -m siglent_converter format-info
"""

from .cli import main

if __name__ == "__main__":
    main()
