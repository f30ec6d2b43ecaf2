"""
Package: models
Description: Data models for the HTTP output engine.

Provides the immutable configuration entities, record/chunk types and
delivery results shared by the delivery components.
"""
