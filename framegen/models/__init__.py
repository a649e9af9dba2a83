"""
Data Models
===========

Pydantic models for requests, responses and per-frame rendering data.
"""
