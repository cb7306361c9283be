"""Boundary Protocols — contracts between core and the collaborators it does not own.

Invariants:
    - Core NEVER imports a concrete hashing implementation
    - Implementations provided by the outer application via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Hashing algorithm is external: this layer only validates password shape
      and stores whatever opaque string the hasher returns
"""

from typing import Protocol


class PasswordHasher(Protocol):
    """Contract for password hashing — implemented by the outer application."""
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, password_hash: str) -> bool: ...
