"""
Core module - configuration, errors, logging and auth.
"""
