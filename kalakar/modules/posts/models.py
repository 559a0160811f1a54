# Supabase table: posts
# Storage bucket: posts (public)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (not null, references auth.users.id) - owning creator
- title: text (not null)
- description: text (nullable)
- image_url: text (not null) - public URL in the posts bucket
- category: text (nullable)
- created_at: timestamp (default: now())

Rows are created and deleted by their owner only; they are never updated.
Images are stored at posts/{user_id}/{epoch_ms}.{ext}. Deleting a row leaves
its image in the bucket.
"""
