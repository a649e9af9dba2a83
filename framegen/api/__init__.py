"""
API Layer
=========

FastAPI application, routes and dependencies.
"""
