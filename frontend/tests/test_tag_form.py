"""
Tests for the tag form client.

The tag service is never contacted; requests.post/get are patched.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests


def service_response(status_code=200, content=b"%PDF-1.4 fake", headers=None, json_data=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.headers = headers or {
        "Content-Type": "application/pdf",
        "Content-Disposition": 'attachment; filename="tesnim-tag-5312345678901.pdf"',
    }
    response.json.return_value = json_data or {}
    return response


class TestIndex:
    """Tests for the form page."""

    def test_renders_form(self, client):
        response = client.get("/")
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert "TESNIM Tag Generator" in html
        for field in ("productName", "id1", "id2", "id3", "size", "price", "currency", "sku"):
            assert f'name="{field}"' in html

    def test_den_selected_by_default(self, client):
        html = client.get("/").get_data(as_text=True)
        assert '<option value="den" selected>' in html


class TestGenerate:
    """Tests for POST /generate."""

    def test_returns_pdf_download(self, client, form_data):
        with patch("frontend.app.requests.post", return_value=service_response()) as mock_post:
            response = client.post("/generate", data=form_data)

        assert response.status_code == 200
        assert response.data == b"%PDF-1.4 fake"
        assert response.headers["Content-Type"] == "application/pdf"
        assert "tesnim-tag-5312345678901.pdf" in response.headers["Content-Disposition"]

        url = mock_post.call_args.args[0]
        assert url.endswith("/api/generate-pdf")
        assert mock_post.call_args.kwargs["json"] == form_data

    @pytest.mark.parametrize("missing", ["productName", "sku"])
    def test_required_fields_checked_before_calling_service(self, client, form_data, missing):
        form_data[missing] = "  "
        with patch("frontend.app.requests.post") as mock_post:
            response = client.post("/generate", data=form_data)

        assert response.status_code == 400
        assert "Product name and SKU are required" in response.get_data(as_text=True)
        mock_post.assert_not_called()

    def test_sku_sent_verbatim(self, client, form_data):
        """Test that surrounding spaces in the SKU reach the service unchanged."""
        form_data["sku"] = " 00-12 "
        with patch("frontend.app.requests.post", return_value=service_response()) as mock_post:
            response = client.post("/generate", data=form_data)

        assert response.status_code == 200
        assert mock_post.call_args.kwargs["json"]["sku"] == " 00-12 "

    def test_unknown_currency_sent_as_den(self, client, form_data):
        form_data["currency"] = "usd"
        with patch("frontend.app.requests.post", return_value=service_response()) as mock_post:
            client.post("/generate", data=form_data)
        assert mock_post.call_args.kwargs["json"]["currency"] == "den"

    def test_service_error_rerenders_form(self, client, form_data):
        with patch("frontend.app.requests.post", return_value=service_response(status_code=500)):
            response = client.post("/generate", data=form_data)

        assert response.status_code == 500
        html = response.get_data(as_text=True)
        assert "Error generating PDF" in html
        assert 'value="Mirror Aurora"' in html

    def test_service_timeout(self, client, form_data):
        with patch("frontend.app.requests.post", side_effect=requests.exceptions.Timeout()):
            response = client.post("/generate", data=form_data)
        assert response.status_code == 504

    def test_service_unreachable(self, client, form_data):
        with patch("frontend.app.requests.post", side_effect=requests.exceptions.ConnectionError()):
            response = client.post("/generate", data=form_data)
        assert response.status_code == 503
        assert "Cannot connect to tag service" in response.get_data(as_text=True)


class TestHealth:
    """Tests for the health proxy."""

    def test_healthy(self, client):
        upstream = service_response(json_data={"status": "healthy"})
        with patch("frontend.app.requests.get", return_value=upstream):
            response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"
        assert response.get_json()["tag_service_response"] == {"status": "healthy"}

    def test_unreachable(self, client):
        with patch("frontend.app.requests.get", side_effect=requests.exceptions.ConnectionError()):
            response = client.get("/health")
        assert response.status_code == 503
        assert response.get_json()["status"] == "unhealthy"
