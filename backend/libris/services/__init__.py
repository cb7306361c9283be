"""Services Layer — transactional write path over validated payloads.

Invariants:
    - Services receive normalized schema instances, never raw payloads
    - Each public operation commits once; constraint failures roll back and
      surface as ConstraintViolationError

Design Decisions:
    - One service class per aggregate, holding the caller's AsyncSession
"""
