# Supabase table: follows
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- follower_id: uuid (not null, references auth.users.id) - the viewer
- following_id: uuid (not null, references auth.users.id) - the creator
- created_at: timestamp (default: now())
- unique (follower_id, following_id)

A row's existence is the only signal that the follower follows the creator.
Rows are inserted and deleted by the follower only.
"""
