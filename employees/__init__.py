"""
Employees module - people licenses are assigned to.

This module handles:
- Employee entity and validation
- Employee lifecycle with default group auto-assignment
"""
