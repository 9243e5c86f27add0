"""
Groups module - named license bundles.

Default groups drive automatic assignment for new employees.
"""
