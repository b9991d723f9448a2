"""GitHub Hosting Client"""

import json
import socket
import urllib.error
import urllib.request

from forjex.hosting.base import HostingBackend, HostingError, HostingSession, RepoOptions, RepositoryExistsError


class GitHubClient(HostingBackend):
    """GitHub REST client. Requires a session with a personal access token."""

    DEFAULT_API_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30

    def __init__(self, session: HostingSession, api_url: str | None = None, timeout: int | None = None):
        if not session.is_valid():
            raise HostingError(
                "Not authenticated with GitHub. Set a token:\n"
                "  export GITHUB_TOKEN='your-token-here'"
            )
        self.session = session
        self.api_url = (api_url or self.DEFAULT_API_URL).rstrip('/')
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    @property
    def name(self) -> str:
        return "GitHub"

    def _request(self, method: str, path: str, payload: dict | None = None) -> dict:
        data = json.dumps(payload).encode('utf-8') if payload is not None else None
        req = urllib.request.Request(
            f"{self.api_url}{path}",
            data=data,
            method=method,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self.session.token}",
                "Content-Type": "application/json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )
        with urllib.request.urlopen(req, timeout=self.timeout) as response:
            return json.loads(response.read().decode('utf-8'))

    def create_repository(self, options: RepoOptions) -> str:
        payload = {
            "name": options.name,
            "description": options.description,
            "private": options.private,
            "auto_init": False,
        }
        try:
            data = self._request("POST", "/user/repos", payload)
        except urllib.error.HTTPError as e:
            if e.code == 422:
                raise RepositoryExistsError(f"Repository name already exists: {options.name}")
            if e.code in (401, 403):
                raise HostingError("GitHub rejected the token. Check GITHUB_TOKEN and its 'repo' scope.")
            raise HostingError(f"GitHub error ({e.code}): {e.reason}")
        except urllib.error.URLError as e:
            if isinstance(e.reason, socket.timeout):
                raise HostingError(f"Request to GitHub timed out after {self.timeout}s")
            raise HostingError(f"GitHub request failed: {e.reason}")
        except json.JSONDecodeError:
            raise HostingError("Invalid response from GitHub")

        clone_url = data.get("clone_url")
        if not clone_url:
            raise HostingError("GitHub response did not include a clone URL")
        return clone_url
