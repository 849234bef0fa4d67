"""
Tag Generator UI - Flask form client for the tag service.

Collects tag fields in an HTML form and returns the rendered PDF download.
"""
