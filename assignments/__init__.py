"""
Assignments module - license to employee bindings.

This module handles:
- Capacity checks and seat selection
- Assigning and returning licenses with history
"""
