"""
Tag Service - Price tag PDF generation.

Renders a fixed-size product price tag (header, product name, identifiers,
size, price, CODE128 barcode) into a single-page PDF using ReportLab.
"""

__version__ = "0.1.0"
