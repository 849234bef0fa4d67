#!/usr/bin/env python3
"""
Download the Inter font files used on tags.

Without these files tags are rendered in Helvetica.

Usage:
    python scripts/download_fonts.py
    python scripts/download_fonts.py --dest fonts
"""

import argparse
import sys
from pathlib import Path

import requests

PROJECT_ROOT = Path(__file__).parent.parent
DEFAULT_DEST = PROJECT_ROOT / "tag_service" / "fonts"

FONT_FILES = {
    "Inter-Regular.ttf": "https://github.com/rsms/inter/raw/v3.19/docs/font-files/Inter-Regular.ttf",
    "Inter-Bold.ttf": "https://github.com/rsms/inter/raw/v3.19/docs/font-files/Inter-Bold.ttf",
}


def download_file(url: str, path: Path, timeout: int = 30) -> None:
    """Download url to path; requests follows redirects."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    path.write_bytes(response.content)


def download_fonts(dest: Path) -> int:
    """Download missing font files into dest. Returns the number of failures."""
    dest.mkdir(parents=True, exist_ok=True)
    failures = 0

    for name, url in FONT_FILES.items():
        path = dest / name
        if path.exists():
            print(f"Skipping {name} (already exists)")
            continue
        try:
            download_file(url, path)
            print(f"Downloaded: {name}")
        except requests.exceptions.RequestException as e:
            failures += 1
            print(f"Error downloading {name}: {e}")

    if failures:
        print("\nPlease download Inter manually from: https://github.com/rsms/inter/releases")
        print(f"Place Inter-Regular.ttf and Inter-Bold.ttf in {dest}")
    return failures


def main() -> int:
    parser = argparse.ArgumentParser(description="Download Inter font files for tags")
    parser.add_argument(
        "--dest", "-d",
        type=str,
        default=str(DEFAULT_DEST),
        help=f"Destination directory (default: {DEFAULT_DEST})"
    )
    args = parser.parse_args()

    print("Downloading Inter font files...")
    failures = download_fonts(Path(args.dest))
    print("\nFont download complete!" if not failures else "\nFont download incomplete.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
