"""
Version information for TalentHub.

This file is the single source of truth for version numbers.
Both the list API and the frontend import from here.
"""

__version__ = "1.2.0"
__version_info__ = (1, 2, 0)
