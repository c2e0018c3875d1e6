"""Integration tests for components working together.

Drives ChatContext end to end: submission, streaming into the store,
finalization, failure handling and the typing flag. The upstream API is
replaced by a scripted session; everything else is real.
"""
