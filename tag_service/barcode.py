"""
CODE128 barcode rendering for tags.

Wraps python-barcode's ImageWriter. Rendering is attempted with a short list
of progressively more conservative settings; the first one that succeeds wins.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import barcode as pybarcode
from barcode.writer import ImageWriter
from PIL import Image

from .errors import EncodingError

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeAttempt",
    "BarcodeEncoder",
    "DEFAULT_ATTEMPTS",
    "MAX_ATTEMPTS",
]

MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class BarcodeAttempt:
    """Writer settings for one rendering attempt (sizes in mm)."""

    module_width: float
    module_height: float
    dpi: int
    quiet_zone: float = 1.0

    def writer_options(self) -> dict:
        return {
            "module_width": self.module_width,
            "module_height": self.module_height,
            "dpi": self.dpi,
            "quiet_zone": self.quiet_zone,
            "write_text": False,
        }


DEFAULT_ATTEMPTS = (
    BarcodeAttempt(module_width=0.4, module_height=15.0, dpi=300),
    BarcodeAttempt(module_width=0.3, module_height=13.0, dpi=200),
    BarcodeAttempt(module_width=0.2, module_height=12.0, dpi=150),
)


class BarcodeEncoder:
    """
    Render text as a monochrome CODE128 image.

    Args:
        attempts: Settings tried in order; only the first MAX_ATTEMPTS are used.
    """

    def __init__(self, attempts: Optional[Sequence[BarcodeAttempt]] = None) -> None:
        attempts = tuple(attempts or DEFAULT_ATTEMPTS)[:MAX_ATTEMPTS]
        if not attempts:
            raise ValueError("At least one barcode attempt is required")
        self.attempts = attempts

    def _render(self, data: str, attempt: BarcodeAttempt) -> Image.Image:
        code = pybarcode.get("code128", data, writer=ImageWriter())
        img = code.render(writer_options=attempt.writer_options())
        if not isinstance(img, Image.Image):
            raise TypeError(f"Barcode output is not an Image.Image object: {type(img)!r}")
        return img

    def encode(self, data: str) -> Image.Image:
        """
        Encode data verbatim as a CODE128 symbol.

        Returns:
            PIL Image in mode '1'

        Raises:
            EncodingError: data is empty or every attempt failed
        """
        if not data:
            raise EncodingError("Barcode data must be a non-empty string")

        last_error: Optional[Exception] = None
        for number, attempt in enumerate(self.attempts, start=1):
            try:
                img = self._render(data, attempt)
                logger.debug(
                    "Rendered CODE128 for %r on attempt %d (%dx%d)",
                    data, number, img.width, img.height,
                )
                return img.convert("1")
            except Exception as e:
                last_error = e
                logger.warning(
                    "Barcode attempt %d/%d failed for %r: %s",
                    number, len(self.attempts), data, e,
                )

        logger.error(f"Barcode generation failed for {data!r} after {len(self.attempts)} attempts")
        raise EncodingError(f"Barcode generation failed: {last_error}") from last_error
