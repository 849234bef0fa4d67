"""
Font selection for tags.

The preferred regular/bold pair is looked up once in an ordered list of
directories and registered with ReportLab. When either file is missing or
cannot be embedded, the built-in Helvetica family is used instead.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .errors import ResourceMissing

logger = logging.getLogger(__name__)

REGULAR_FONT_NAME = "Inter"
BOLD_FONT_NAME = "Inter-Bold"
FALLBACK_REGULAR = "Helvetica"
FALLBACK_BOLD = "Helvetica-Bold"


def find_font_file(filename: str, search_dirs: Iterable[str]) -> str:
    """
    Return the first existing path for filename in search_dirs.

    Raises:
        ResourceMissing: the file is in none of the directories
    """
    for directory in search_dirs:
        candidate = os.path.join(directory, filename)
        if os.path.isfile(candidate):
            return candidate
    raise ResourceMissing(f"Font {filename} not found")


@dataclass(frozen=True)
class FontSet:
    """Names of the registered regular and bold fonts."""

    regular: str = FALLBACK_REGULAR
    bold: str = FALLBACK_BOLD
    embedded: bool = False

    @property
    def family(self) -> str:
        return self.regular

    @classmethod
    def fallback(cls) -> "FontSet":
        return cls()

    @classmethod
    def resolve(
        cls,
        search_dirs: Iterable[str],
        regular_file: str = "Inter-Regular.ttf",
        bold_file: str = "Inter-Bold.ttf",
    ) -> "FontSet":
        """
        Locate and register the preferred font pair, falling back to Helvetica.

        Never raises for missing or broken font files.
        """
        search_dirs = list(search_dirs)
        try:
            regular_path = find_font_file(regular_file, search_dirs)
            bold_path = find_font_file(bold_file, search_dirs)
            cls._register(REGULAR_FONT_NAME, regular_path)
            cls._register(BOLD_FONT_NAME, bold_path)
        except ResourceMissing as e:
            logger.warning(f"{e}; using {FALLBACK_REGULAR} fallback")
            return cls.fallback()

        logger.info(f"Registered tag fonts from {regular_path} and {bold_path}")
        return cls(regular=REGULAR_FONT_NAME, bold=BOLD_FONT_NAME, embedded=True)

    @staticmethod
    def _register(name: str, path: str) -> None:
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except Exception as e:
            raise ResourceMissing(f"Font {path} could not be embedded: {e}") from e


def resolve_fonts(settings) -> FontSet:
    """Resolve the font pair named by TagSettings."""
    return FontSet.resolve(
        settings.font_dirs_list,
        regular_file=settings.regular_font_file,
        bold_file=settings.bold_font_file,
    )


def text_ascent(font_name: str, size: float) -> float:
    """Distance from the top of a line box to its baseline."""
    ascent: Optional[float] = pdfmetrics.getAscent(font_name, size)
    return ascent if ascent else size * 0.8
