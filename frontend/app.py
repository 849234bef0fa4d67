"""
Flask application for the Tag Generator UI.

Serves the tag form and proxies submissions to the tag service, so the
browser never talks to the service directly (no CORS setup needed).

Stack: Flask + Tailwind CSS (CDN)
"""

import logging
import os
from typing import Any, Dict

import requests
from dotenv import load_dotenv
from flask import Flask, Response, jsonify, render_template, request

# Load environment variables
load_dotenv()

app = Flask(__name__)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Configuration
TAG_SERVICE_URL = os.getenv("TAG_SERVICE_URL", "http://localhost:8001")
REQUEST_TIMEOUT = 30  # seconds

TAG_FIELDS = ("productName", "id1", "id2", "id3", "size", "price", "currency", "sku")
CURRENCIES = (("den", "Denar (den)"), ("euro", "Euro (€)"))


def read_form() -> Dict[str, Any]:
    """Collect tag fields from the submitted form as typed, with 'den' as default currency."""
    data = {field: request.form.get(field, "") for field in TAG_FIELDS}
    if data["currency"] not in dict(CURRENCIES):
        data["currency"] = "den"
    return data


def render_form(form: Dict[str, Any], error: str = "", status: int = 200):
    return render_template(
        "index.html",
        form=form,
        currencies=CURRENCIES,
        error=error,
    ), status


@app.route("/", methods=["GET"])
def index():
    """Show an empty tag form."""
    return render_form({field: "" for field in TAG_FIELDS} | {"currency": "den"})


@app.route("/generate", methods=["POST"])
def generate():
    """
    Render a tag via the tag service and return it as a download.

    Returns:
        PDF attachment, or the form re-rendered with an error
    """
    form = read_form()
    if not form["productName"].strip() or not form["sku"].strip():
        return render_form(form, "Product name and SKU are required", 400)

    try:
        response = requests.post(
            f"{TAG_SERVICE_URL}/api/generate-pdf",
            json=form,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.exceptions.Timeout:
        logger.error("Tag service timeout")
        return render_form(form, "Tag service timeout. Please try again.", 504)
    except requests.exceptions.ConnectionError:
        logger.error(f"Cannot connect to tag service at {TAG_SERVICE_URL}")
        return render_form(form, "Cannot connect to tag service.", 503)

    if response.status_code != 200:
        logger.error(f"Tag service returned {response.status_code} for sku={form['sku']!r}")
        return render_form(form, "Error generating PDF. Please try again.", response.status_code)

    return Response(
        response.content,
        content_type=response.headers.get("Content-Type", "application/pdf"),
        headers={
            "Content-Disposition": response.headers.get(
                "Content-Disposition", 'attachment; filename="tag.pdf"'
            )
        },
    )


@app.route("/health", methods=["GET"])
def health_check():
    """
    Check if the tag service is healthy.

    Returns:
        JSON with tag service health status
    """
    try:
        response = requests.get(f"{TAG_SERVICE_URL}/health", timeout=5)

        return jsonify({
            "status": "healthy" if response.status_code == 200 else "unhealthy",
            "tag_service_url": TAG_SERVICE_URL,
            "tag_service_response": response.json() if response.status_code == 200 else None,
        }), 200

    except requests.exceptions.Timeout:
        return jsonify({
            "status": "unhealthy",
            "error": "Tag service timeout",
            "tag_service_url": TAG_SERVICE_URL,
        }), 503
    except requests.exceptions.ConnectionError:
        return jsonify({
            "status": "unhealthy",
            "error": "Cannot connect to tag service",
            "tag_service_url": TAG_SERVICE_URL,
        }), 503


if __name__ == "__main__":
    port = int(os.getenv("FLASK_PORT", 5000))
    debug = os.getenv("FLASK_DEBUG", "true").lower() == "true"

    print(f"Starting Tag Generator UI on http://localhost:{port}")
    print(f"Tag service: {TAG_SERVICE_URL}")
    app.run(host="0.0.0.0", port=port, debug=debug)
