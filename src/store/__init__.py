"""Storage and build catalog layer.

This module assembles, encodes, and persists immutable build outputs.
It powers build listing and table loading for the SDK.
"""
