"""
Imports module - CSV bulk import of licenses, employees, groups,
assignments and seat keys.
"""
