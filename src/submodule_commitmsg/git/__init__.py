"""Git module — repository discovery, submodule enumeration, history walks."""

from submodule_commitmsg.git.repository import (
    AmbiguityResolutionError,
    GitError,
    ObjectNotFoundError,
    Repository,
    RepositoryNotFoundError,
    RevWalk,
    RevWalkError,
    SubmoduleEnumerationError,
    discover_repository,
)
from submodule_commitmsg.git.submodules import Submodule, list_submodules

__all__ = [
    "AmbiguityResolutionError",
    "GitError",
    "ObjectNotFoundError",
    "Repository",
    "RepositoryNotFoundError",
    "RevWalk",
    "RevWalkError",
    "Submodule",
    "SubmoduleEnumerationError",
    "discover_repository",
    "list_submodules",
]
