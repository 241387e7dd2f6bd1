"""
Token service package: a Flask HTTP front end for the tokengen core.
"""

from .app import create_app

__all__ = ['create_app']
