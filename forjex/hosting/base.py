"""Hosting Backend Base Classes"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass


class HostingError(Exception):
    """Raised when the hosting service rejects or fails a request."""
    pass


class RepositoryExistsError(HostingError):
    """The repository name is already taken. The user can pick another."""
    pass


@dataclass
class HostingSession:
    """Credentials for one hosting account, passed explicitly to clients."""
    token: str | None = None
    expires_at: float | None = None  # Unix timestamp; None never expires

    def is_valid(self) -> bool:
        if not self.token:
            return False
        return self.expires_at is None or time.time() < self.expires_at

    @classmethod
    def from_env(cls) -> 'HostingSession':
        return cls(token=os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN"))


@dataclass
class RepoOptions:
    name: str
    description: str = ""
    private: bool = False


class HostingBackend(ABC):
    """Creates remote repositories."""

    @abstractmethod
    def create_repository(self, options: RepoOptions) -> str:
        """Create the repository and return its clone URL."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass
