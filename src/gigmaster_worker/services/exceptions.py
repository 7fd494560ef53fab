"""Shared service-layer exceptions."""

from __future__ import annotations


class GenerationFailure(Exception):
    """Expected failure during song generation."""


class LibraryLoadFailure(GenerationFailure):
    """A content library could not be read or held nothing usable."""

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"{kind} library unavailable: {reason}")
        self.kind = kind
        self.reason = reason


class EmptyCandidateSet(GenerationFailure):
    """Weighted selection was handed nothing to choose from."""
