# Supabase table: contact_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- sender_id: uuid (not null, references auth.users.id)
- creator_id: uuid (not null, references auth.users.id)
- message: text (not null)
- status: text (not null, default: 'pending',
          check status in ('pending', 'accepted', 'rejected'))
- created_at: timestamp (default: now())

Rows are inserted by the sender. Only the creator changes status, and only
from pending to accepted or rejected. A resolved request is never reopened.
"""
