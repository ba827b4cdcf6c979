from .activity import Activity, ActivityCategory
from .grid_intensity import GridIntensity
from .profile import Profile

__all__ = [
    "Activity",
    "ActivityCategory",
    "GridIntensity",
    "Profile",
]
