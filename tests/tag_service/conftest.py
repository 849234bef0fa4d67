"""
Shared fixtures for tag service tests.

Provides settings isolated from the environment, a renderer that uses the
Helvetica fallback, and a RecordingSurface that captures drawing calls so
layout can be checked without parsing PDF content streams.
"""

from typing import List, Tuple

import pytest
from PIL import Image

from tag_service.config import TagSettings
from tag_service.fonts import FontSet
from tag_service.layout import PAGE_HEIGHT, PAGE_WIDTH
from tag_service.models import TagRequest
from tag_service.renderer import TagRenderer
from tag_service.surface import PageSurface

TAG_ENV_VARS = [
    "ENVIRONMENT",
    "TAG_BRAND_NAME",
    "TAG_FOOTER_TEXT",
    "TAG_FILENAME_PREFIX",
    "TAG_FONT_DIRS",
    "TAG_REGULAR_FONT",
    "TAG_BOLD_FONT",
    "TAG_LAYOUT_MODE",
    "TAG_TEMPLATE_PATH",
    "MAX_CONCURRENT_RENDERS",
    "CORS_ORIGINS",
]


class RecordingSurface(PageSurface):
    """PageSurface that records calls instead of drawing."""

    def __init__(self, width: float = PAGE_WIDTH, height: float = PAGE_HEIGHT) -> None:
        self._size = (width, height)
        self.backgrounds: List[str] = []
        self.texts: List[Tuple[str, float, str, float]] = []
        self.images: List[Tuple[float, float, float, float]] = []
        self.lines: List[Tuple[float, float, float]] = []

    @property
    def page_size(self):
        return self._size

    def fill_background(self, color):
        self.backgrounds.append(color)

    def draw_text(self, text, y, font, size, color="#000000"):
        self.texts.append((text, y, font, size))

    def draw_image(self, image, x, y, width, height):
        self.images.append((x, y, width, height))

    def draw_line(self, x1, x2, y, color="#000000", width=0.5):
        self.lines.append((x1, x2, y))

    def finish(self):
        return b"%PDF-recorded"

    def text_values(self) -> List[str]:
        return [t[0] for t in self.texts]

    def y_of(self, text: str) -> float:
        for value, y, _, _ in self.texts:
            if value == text:
                return y
        raise KeyError(text)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep real TAG_* variables out of settings built in tests."""
    for name in TAG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "development")


@pytest.fixture
def settings(tmp_path):
    """Settings whose font search finds nothing, so Helvetica is used."""
    return TagSettings(font_dirs=str(tmp_path / "no-fonts"))


@pytest.fixture
def renderer(settings):
    return TagRenderer(settings, fonts=FontSet.fallback())


@pytest.fixture
def sample_request():
    return TagRequest.create(
        product_name="Mirror Aurora",
        sku="5312345678901",
        price="6250",
        currency="den",
    )


@pytest.fixture
def barcode_image():
    return Image.new("1", (200, 50), color=1)


@pytest.fixture
def recording_surface():
    return RecordingSurface()
