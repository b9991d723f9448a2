"""Remote Repository Hosting Package"""

from forjex.hosting.base import HostingBackend, HostingError, HostingSession, RepoOptions, RepositoryExistsError
from forjex.hosting.github import GitHubClient

__all__ = [
    "HostingBackend",
    "HostingError",
    "HostingSession",
    "RepoOptions",
    "RepositoryExistsError",
    "GitHubClient",
]
