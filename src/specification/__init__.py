"""Variant specification translation core.

Assignment codec, version selector and dialect translator. Pure,
synchronous and in-memory; nothing here does I/O.
"""
