# Supabase Auth
# This module uses Supabase's built-in authentication system
# Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.on_auth_state_change() - Session change notifications

The account type ("user" or "creator") and full name are stored in the
user_metadata field during registration. Sign-up also writes the account's
public rows: one profiles row, plus one creator_profiles row for creators.
"""
