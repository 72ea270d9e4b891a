"""Infrastructure Layer: database access and cross-cutting concerns.

Invariants:
    - Every store call is wrapped with timeout and error mapping (StoreError)
"""
