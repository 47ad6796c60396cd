"""Database Definitions — SQLAlchemy Base and shared column types.

Invariants:
    - Single async engine per process (initialized via init_db)
"""
