"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application, provider and rendering settings
- logging: Structured logging configuration
"""
