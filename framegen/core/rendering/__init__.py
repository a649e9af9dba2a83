"""
Rendering Module
===============

HTML generation and PNG creation through the external rendering provider.

Components:
- layout: canvas height calculation
- html_generator: per-frame HTML markup from the Jinja2 template
- provider_client: Cloudinary upload API client
- frame_renderer: one frame from markup to data URI
"""
