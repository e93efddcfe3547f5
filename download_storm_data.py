"""
Download the NOAA Storm Data extract (1950-2011) used by the pipelines.

This script downloads the bzip2-compressed StormData CSV and saves it,
still compressed, to our raw layer (data/01_raw/).  pandas reads the .bz2
directly, so there is nothing to decompress.  An existing file is reused.
"""

from pathlib import Path

import pandas as pd
import requests

URL = "https://d396qusza40orc.cloudfront.net/repdata%2Fdata%2FStormData.csv.bz2"
RAW_DATA_DIR = Path("data/01_raw")
RAW_FILE = RAW_DATA_DIR / "StormData.csv.bz2"


def download_storm_data() -> str:
    """
    Download the StormData file unless it is already on disk.

    Returns:
        str: Path to the compressed CSV file
    """
    if RAW_FILE.exists():
        print(f"Already exists, skipping download: {RAW_FILE}")
        return str(RAW_FILE)

    RAW_DATA_DIR.mkdir(parents=True, exist_ok=True)

    print("Downloading NOAA Storm Data...")
    print(f"Source: {URL}")
    print(f"Target: {RAW_FILE}")

    # Write to a temporary name so an interrupted download is not cached
    partial_file = RAW_FILE.with_suffix(".part")
    with requests.get(URL, stream=True, timeout=300) as response:
        response.raise_for_status()
        with open(partial_file, "wb") as f:
            for chunk in response.iter_content(chunk_size=1024 * 1024):
                f.write(chunk)
    partial_file.rename(RAW_FILE)

    print(f"Downloaded {RAW_FILE.stat().st_size / 1024 / 1024:.1f} MB")
    return str(RAW_FILE)


def explore_data(file_path: str) -> None:
    """
    Print the parts of the raw data the pipelines have to cope with.

    Args:
        file_path: Path to the compressed CSV file
    """
    print("\n" + "=" * 60)
    print("NOAA STORM DATA - RAW EXPLORATION")
    print("=" * 60)

    print("Loading data into pandas DataFrame...")
    df = pd.read_csv(file_path, compression="bz2", low_memory=False)

    print("\nBASIC INFO")
    print(f"Row count: {len(df):,}")
    print(f"Column count: {len(df.columns)}")

    print("\nEVENT TYPES")
    event_types = df["EVTYPE"].value_counts()
    print(f"Distinct raw labels: {len(event_types):,} (canonical: 48)")
    print(event_types.head(30).to_string())

    for col in ["PROPDMGEXP", "CROPDMGEXP"]:
        print(f"\n{col} CODES")
        print(df[col].value_counts(dropna=False).to_string())

    print("\nBGN_DATE EXAMPLES")
    for i, val in enumerate(df["BGN_DATE"].head(5), 1):
        print(f"{i:2}. '{val}'")


if __name__ == "__main__":
    csv_file = download_storm_data()
    explore_data(csv_file)
