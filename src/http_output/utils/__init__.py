"""
Module: utils
Description: Shared helpers for the HTTP output engine.

Current utilities:
- logger: Structured logging configuration and helpers
"""
