# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, references auth.users.id)
- nickname: text (not null)
- avatar_url: text (nullable)
- created_at: timestamp (default: now())

Rows are created by the board the first time a signed-in user is seen and
are never updated from provider metadata afterwards.
"""
