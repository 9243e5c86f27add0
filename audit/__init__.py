"""
Audit module - append-only change history and its search.
"""
