"""Impound exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class ImpoundError(Exception):
    """Base exception for all Impound failures."""


class ImpoundConfigError(ImpoundError):
    """Raised for invalid runtime configuration."""


class ImpoundIngestError(ImpoundError):
    """Raised for source reading and row adapter failures."""


class ImpoundStoreError(ImpoundError):
    """Raised for build store and table persistence failures."""


class ImpoundDependencyError(ImpoundError):
    """Raised when an optional runtime dependency is missing."""
