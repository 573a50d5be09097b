"""
envscan - find environment variables a codebase uses but never declares.
"""

__version__ = "0.1.0"
