"""
Persistence for termjack.
"""

from termjack.storage.profile import DEFAULT_PROFILE_PATH, ProfileStore

__all__ = ["DEFAULT_PROFILE_PATH", "ProfileStore"]
