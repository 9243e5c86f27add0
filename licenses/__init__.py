"""
Licenses module - license inventory management.

This module handles:
- License entity and validation
- Seat inventory reconciliation for key-based licenses
- Cost and renewal date computation
- Dashboard figures
"""
