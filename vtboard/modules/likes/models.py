# Supabase table: likes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, not null)
- user_id: uuid (foreign key to profiles.id, not null)
- created_at: timestamp (default: now())
- unique constraint on (post_id, user_id)

The unique constraint is what keeps a double toggle from leaving two rows;
the board itself does not serialize toggles.
"""
