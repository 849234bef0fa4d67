"""
Unit tests for the CODE128 barcode encoder.
"""

from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from tag_service.barcode import DEFAULT_ATTEMPTS, MAX_ATTEMPTS, BarcodeAttempt, BarcodeEncoder
from tag_service.errors import EncodingError


class TestBarcodeEncoder:
    """Tests for BarcodeEncoder.encode."""

    def test_encodes_digits(self):
        img = BarcodeEncoder().encode("5312345678901")
        assert isinstance(img, Image.Image)
        assert img.mode == "1"
        assert img.width > img.height > 0

    def test_encodes_printable_ascii(self):
        """Test that mixed printable ASCII payloads are accepted."""
        img = BarcodeEncoder().encode("Ab-12/x y.Z")
        assert img.width > 0

    def test_empty_data_rejected_without_attempts(self):
        encoder = BarcodeEncoder()
        with patch.object(encoder, "_render") as mock_render:
            with pytest.raises(EncodingError):
                encoder.encode("")
            mock_render.assert_not_called()

    def test_payload_passed_verbatim(self):
        """Test that the exact SKU reaches python-barcode."""
        with patch("tag_service.barcode.pybarcode.get") as mock_get:
            mock_get.return_value.render.return_value = Image.new("RGB", (100, 30), "white")
            BarcodeEncoder().encode(" 00-12/ab ")
        assert mock_get.call_args.args[:2] == ("code128", " 00-12/ab ")

    def test_writer_options_disable_text(self):
        assert DEFAULT_ATTEMPTS[0].writer_options()["write_text"] is False

    def test_attempts_are_progressively_smaller(self):
        widths = [a.module_width for a in DEFAULT_ATTEMPTS]
        heights = [a.module_height for a in DEFAULT_ATTEMPTS]
        assert widths == sorted(widths, reverse=True)
        assert heights == sorted(heights, reverse=True)


class TestBarcodeFallback:
    """Tests for the bounded retry chain."""

    def test_falls_back_to_next_attempt(self):
        encoder = BarcodeEncoder()
        good = Image.new("RGB", (100, 30), "white")
        with patch.object(encoder, "_render", side_effect=[RuntimeError("boom"), good]) as mock_render:
            img = encoder.encode("123")
        assert img.mode == "1"
        assert mock_render.call_count == 2
        assert mock_render.call_args_list[1].args[1] == DEFAULT_ATTEMPTS[1]

    def test_raises_after_all_attempts(self):
        encoder = BarcodeEncoder()
        with patch.object(encoder, "_render", side_effect=RuntimeError("boom")) as mock_render:
            with pytest.raises(EncodingError, match="boom") as exc_info:
                encoder.encode("123")
        assert mock_render.call_count == MAX_ATTEMPTS
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_attempt_list_capped(self):
        """Test that extra attempts beyond the ceiling are ignored."""
        attempts = [BarcodeAttempt(0.3, 10.0, 100)] * 5
        encoder = BarcodeEncoder(attempts)
        assert len(encoder.attempts) == MAX_ATTEMPTS

    def test_non_image_output_counts_as_failure(self):
        encoder = BarcodeEncoder()
        fake = MagicMock()
        fake.render.return_value = b"not an image"
        with patch("tag_service.barcode.pybarcode.get", return_value=fake):
            with pytest.raises(EncodingError):
                encoder.encode("123")
        assert fake.render.call_count == MAX_ATTEMPTS
