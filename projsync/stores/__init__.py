"""Persistence helpers."""

from .membership import MembershipStore

__all__ = ["MembershipStore"]
