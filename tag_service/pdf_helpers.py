"""
Helper functions for tag PDF responses.
"""

import re


def sanitize_for_path(text: str) -> str:
    """
    Sanitize text for use in filenames and Content-Disposition headers.

    Replaces special characters (except word chars, spaces, hyphens, dots)
    with underscores, then replaces spaces with underscores.

    Example:
        >>> sanitize_for_path('SKU "42"/A')
        'SKU__42__A'
    """
    cleaned = re.sub(r'[^\w\s.-]', '_', text, flags=re.ASCII)
    return cleaned.replace(" ", "_")


def build_tag_filename(prefix: str, sku: str) -> str:
    """
    Suggested download filename for a tag.

    Example:
        >>> build_tag_filename("tesnim-tag", "5312345678901")
        'tesnim-tag-5312345678901.pdf'
    """
    return f"{prefix}-{sanitize_for_path(sku)}.pdf"
