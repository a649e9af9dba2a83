"""
Test Utilities
==============

Stub provider and assertion helpers shared by the test suite.
"""
