"""
Movie recommendation engine.

Responsibilities:
- Accept a user id, favourite genres and a result limit.
- Summarise the user's rating history and the catalog for the LLM.
- Match the LLM's suggested titles back onto unrated catalog movies.
- Backfill from the catalog when the LLM under-produces.
"""
