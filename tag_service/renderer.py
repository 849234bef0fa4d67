"""
Tag renderer: TagRequest in, single-page PDF bytes out.

Fonts and the optional template are resolved once when the renderer is
built. Each render call is independent and keeps no state between calls.
"""

import logging
from functools import lru_cache
from typing import Optional

from .barcode import BarcodeEncoder
from .config import TagSettings, get_settings
from .errors import RenderError, ResourceMissing, SerializationError
from .fonts import FontSet, resolve_fonts
from .layout import PAGE_HEIGHT, PAGE_WIDTH, TagFrame, draw_layout
from .models import TagRequest
from .surface import CanvasSurface, PageSurface, TemplateOverlaySurface, load_template

logger = logging.getLogger(__name__)


class TagRenderer:
    """
    Renders tags with a fixed font set, encoder and layout mode.

    Args:
        settings: Tag settings (brand, footer, layout mode, template path)
        fonts: Resolved font pair; resolved from settings when omitted
        encoder: Barcode encoder; the default CODE128 encoder when omitted
    """

    def __init__(
        self,
        settings: TagSettings,
        fonts: Optional[FontSet] = None,
        encoder: Optional[BarcodeEncoder] = None,
    ) -> None:
        self.settings = settings
        self.fonts = fonts if fonts is not None else resolve_fonts(settings)
        self.encoder = encoder or BarcodeEncoder()
        self.template: Optional[bytes] = None

        if settings.layout_mode == "template":
            self.template = self._load_template(settings.template_path)

    @staticmethod
    def _load_template(path: Optional[str]) -> Optional[bytes]:
        if not path:
            logger.warning("Template layout requested without a template path; using canvas layout")
            return None
        try:
            template = load_template(path)
        except ResourceMissing as e:
            logger.warning(f"{e}; using canvas layout")
            return None
        logger.info(f"Loaded tag template from {path}")
        return template

    @property
    def layout_mode(self) -> str:
        return "template" if self.template is not None else "canvas"

    def _new_surface(self, title: str) -> PageSurface:
        if self.template is not None:
            return TemplateOverlaySurface(self.template, title=title)
        return CanvasSurface(PAGE_WIDTH, PAGE_HEIGHT, title=title)

    def render(self, request: TagRequest) -> bytes:
        """
        Render a tag to PDF bytes.

        Raises:
            EncodingError: the barcode could not be produced
            SerializationError: the PDF could not be assembled
        """
        logger.info(f"Rendering tag sku={request.sku!r} layout={self.layout_mode}")

        barcode = self.encoder.encode(request.sku)

        frame = TagFrame(
            request=request,
            fonts=self.fonts,
            barcode=barcode,
            brand_name=self.settings.brand_name,
            footer_text=self.settings.footer_text,
        )

        try:
            surface = self._new_surface(title=f"{self.settings.brand_name} {request.sku}")
            draw_layout(surface, frame)
            pdf_bytes = surface.finish()
        except RenderError:
            raise
        except Exception as e:
            logger.error(f"PDF assembly failed for sku={request.sku!r}: {e}")
            raise SerializationError(f"PDF assembly failed: {e}") from e

        if not pdf_bytes.startswith(b"%PDF"):
            raise SerializationError("PDF assembly produced an invalid document")

        logger.info(f"Rendered tag sku={request.sku!r} ({len(pdf_bytes)} bytes)")
        return pdf_bytes


@lru_cache()
def get_renderer() -> TagRenderer:
    """Process-wide renderer built from the cached settings."""
    return TagRenderer(get_settings())


def render_tag(request: TagRequest) -> bytes:
    """Render a tag with the process-wide renderer."""
    return get_renderer().render(request)

