"""Blog Publishing Package — post CRUD service and its view client.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
