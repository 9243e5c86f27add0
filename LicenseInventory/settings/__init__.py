"""
Django settings module.

This package contains environment-specific settings:
- base.py: shared by every environment
- dev.py, test.py and prod.py: per-environment overrides
"""
