"""
Accounts module - console users, login sessions and admin user management.
"""
