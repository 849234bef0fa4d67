"""
Shared fixtures for frontend tests.

Provides a Flask test client; calls to the tag service are patched per test.
"""

import pytest


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    from frontend.app import app

    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def form_data():
    return {
        "productName": "Mirror Aurora",
        "id1": "MIR-1205",
        "id2": "",
        "id3": "",
        "size": "40×60 cm",
        "price": "6250",
        "currency": "den",
        "sku": "5312345678901",
    }
