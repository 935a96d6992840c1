"""Ingestion helpers.

Everything that touches untyped provider payloads lives here; nothing past
this boundary sees raw JSON shapes.
"""
