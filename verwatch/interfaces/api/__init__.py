"""
Api package.
"""

from .api_app import create_app

__all__ = ["create_app"]
