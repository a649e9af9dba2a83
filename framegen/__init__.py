"""
GIF Frame Generator
===================

A small web service that renders a block of user text into four visually
distinct PNG frames through an external HTML-to-image provider.

This package provides:
- Layout sizing and Jinja2-based frame markup generation
- An aiohttp client for the Cloudinary upload API
- A sequential, all-or-nothing frame pipeline
- FastAPI endpoints for HTTP access
"""

__version__ = "1.0.0"
__author__ = "GIF Frame Generator Team"
