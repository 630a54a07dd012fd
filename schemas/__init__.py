"""
Pydantic schemas for Charity Finder Backend.
"""

from .common import *
from .places import *
from .user import *
from .profile import *
from .favorite import *
from .donation import *
