"""Client Layer — view state machine and the HTTP client it fetches through.

Invariants:
    - Client code imports core/ and schemas/, never services/ or infrastructure/
    - All network IO goes through api_client.BlogApi
"""
