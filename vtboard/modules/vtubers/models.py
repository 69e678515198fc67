# Supabase table: vtubers
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- channel_url: text (nullable)
- created_at: timestamp (default: now())

posts.vtuber_id references this table without ON DELETE CASCADE; deleting
a streamer leaves its posts in place.
"""
