"""
Test Suite
==========

Test suite matching the framegen/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: API contract tests against a stubbed rendering provider
"""
