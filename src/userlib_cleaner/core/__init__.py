"""
Core configuration, constants and shared helpers.
"""
