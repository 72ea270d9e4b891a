"""InfoShare Posts API: CRUD service for community posts.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
