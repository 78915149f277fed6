"""CLI interface package for LookzScore.

This package provides the command-line interface for the lookz tool.
"""

from lookz.cli.app import app

__all__ = ['app']
