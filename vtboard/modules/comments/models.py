# Supabase table: comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- post_id: uuid (foreign key to posts.id, not null)
- user_id: uuid (foreign key to profiles.id, not null)
- body: text (not null)
- created_at: timestamp (default: now())

There is no update or delete path for comments.
"""
