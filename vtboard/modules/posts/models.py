# Supabase table: posts
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- vtuber_id: uuid (foreign key to vtubers.id, nullable, no cascade)
- title: text (not null)
- body: text (not null)
- user_id: uuid (foreign key to profiles.id, not null) - author
- created_at: timestamp (default: now())

RLS is expected to allow delete only where user_id = auth.uid().
"""
