"""Services — imperative shell around the pure core.

Invariants:
    - post_store owns all SQL; post_service owns row/transport translation
"""
