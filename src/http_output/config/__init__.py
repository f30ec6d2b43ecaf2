"""
Package: config
Description: Connector option loading and validation.
"""
