"""
Package: delivery
Description: Chunk delivery for the HTTP output engine.

Provides serializers, the rate limiter, request building, the HTTP
transport and the engine that orchestrates them per chunk.
"""
