"""
SQLAlchemy ORM models for Charity Finder Backend.
"""

from .user import AppUser
from .profile import Profile
from .favorite import FavoritePlace
from .donation import DonationRecord

__all__ = [
    "AppUser",
    "Profile",
    "FavoritePlace",
    "DonationRecord",
]
