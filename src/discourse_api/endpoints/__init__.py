"""
Endpoint helpers grouped by forum resource.

Each mixin maps its arguments to a path, a parameter variant and a verb, and
relies on the ``get``/``put``/``post``/``delete`` methods of the executor.
"""

from .categories import CategoriesMixin
from .groups import GroupsMixin
from .posts import PostsMixin
from .site import SiteMixin
from .users import UsersMixin

__all__ = [
    "CategoriesMixin",
    "GroupsMixin",
    "PostsMixin",
    "SiteMixin",
    "UsersMixin",
]
