"""
Catalog and rating storage.

Responsibilities:
- Serve the movie catalog ordered by aggregate rating.
- Read and upsert per-user ratings (one rating per user and movie).
- Read and write per-user favourite genres.
- Hide whether the data lives in Supabase or in a local CSV catalog.
"""
