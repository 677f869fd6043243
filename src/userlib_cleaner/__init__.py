"""
userlib-cleaner: find and remove duplicate library archives.
"""

__version__ = "0.1.0"
