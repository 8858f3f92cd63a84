"""Revision chain building and comparison selection."""

from revision_diff.revisions.chain import ChainEntry, RevisionChain
from revision_diff.revisions.selection import check_available, select, validate

__all__ = ["ChainEntry", "RevisionChain", "check_available", "select", "validate"]
