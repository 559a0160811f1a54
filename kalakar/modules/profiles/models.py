# Supabase tables: profiles, creator_profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# The full DDL with row level security policies lives in sql/schema.sql

"""
Expected Supabase table structure:

profiles (one row per account, written by its owner):
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, not null, references auth.users.id)
- full_name: text (nullable)
- avatar_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

creator_profiles (one row per creator account, written by its owner):
- id: uuid (primary key)
- user_id: uuid (unique, not null, references auth.users.id)
- bio: text (nullable)
- city: text (nullable)
- state: text (nullable)
- phone: text (nullable)
- whatsapp: text (nullable)
- instagram: text (nullable)
- website: text (nullable)
- categories: text[] (default: '{}') - unordered set of craft category names
- portfolio_description: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Both tables are publicly readable.
"""
