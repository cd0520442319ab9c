"""
Collaborators used by the email core.

This package contains template loaders for the filesystem, package data
and S3.
"""

__all__ = ['templates', 's3']
