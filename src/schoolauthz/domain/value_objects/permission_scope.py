"""Permission scopes and their dominance order."""

from enum import StrEnum


class PermissionScope(StrEnum):
    """Breadth of access for a resource/action pair.

    ``ALL`` is the unique top element: it satisfies a request for any scope.
    ``NONE`` grants nothing. The remaining scopes are mutually incomparable.
    """

    ALL = "all"
    OWN_LEVEL = "own_level"
    OWN_CLASSES = "own_classes"
    OWN_CHILDREN = "own_children"
    OWN = "own"
    NONE = "none"

    def satisfies(self, requested: "PermissionScope") -> bool:
        """Whether holding this scope satisfies a request for ``requested``."""
        if self is PermissionScope.NONE:
            return False
        if self is PermissionScope.ALL:
            return True
        return self == requested
