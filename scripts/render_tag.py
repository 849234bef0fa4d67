#!/usr/bin/env python3
"""
Render a price tag PDF locally, without the HTTP service.

Usage:
    python scripts/render_tag.py --name "Mirror Aurora" --sku 5312345678901 --price 6250
    python scripts/render_tag.py --name "Mirror Aurora" --sku 5312345678901 --price 52 --currency euro \\
        --id1 MIR-1205 --size "40×60 cm" --output mirror.pdf
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tag_service.config import get_settings  # noqa: E402
from tag_service.errors import RenderError, TagValidationError  # noqa: E402
from tag_service.models import TagRequest  # noqa: E402
from tag_service.pdf_helpers import build_tag_filename  # noqa: E402
from tag_service.renderer import render_tag  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a price tag to PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--name", required=True, help="Product name")
    parser.add_argument("--sku", required=True, help="SKU, printed and encoded as CODE128")
    parser.add_argument("--id1", default="", help="First identifier line")
    parser.add_argument("--id2", default="", help="Second identifier line")
    parser.add_argument("--id3", default="", help="Third identifier line")
    parser.add_argument("--size", default="", help="Size line")
    parser.add_argument("--price", default="", help="Price")
    parser.add_argument("--currency", default="den", choices=["den", "euro"], help="Currency (default: den)")
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output path (default: <prefix>-<sku>.pdf in the current directory)"
    )
    return parser


def main(argv=None) -> int:
    """CLI entry point for tag rendering."""
    args = build_parser().parse_args(argv)

    try:
        tag = TagRequest.create(
            product_name=args.name,
            sku=args.sku,
            id1=args.id1,
            id2=args.id2,
            id3=args.id3,
            size=args.size,
            price=args.price,
            currency=args.currency,
        )
        pdf_bytes = render_tag(tag)
    except TagValidationError as e:
        print(f"❌ Invalid tag: {e}")
        return 1
    except RenderError as e:
        print(f"❌ Rendering failed: {e}")
        return 1

    output = Path(args.output or build_tag_filename(get_settings().filename_prefix, tag.sku))
    output.write_bytes(pdf_bytes)
    print(f"✅ Created: {output} ({len(pdf_bytes)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
