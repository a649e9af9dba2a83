"""
Core Business Logic
==================

Core business logic modules for frame generation.

Modules:
- rendering: layout sizing, HTML generation, provider client and frame rendering
- pipeline: four-frame orchestration
"""
