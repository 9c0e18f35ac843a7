"""GitHub client for reading PR changes and updating PR labels."""

import time
from collections.abc import Iterable

import jwt
import requests
from github import Auth, Github, GithubException
from github.PullRequest import PullRequest

from pr_size_labeler.sizing.aggregator import ChangeRecord
from pr_size_labeler.sizing.reconciler import ReconciliationPlan

DEFAULT_API_URL = "https://api.github.com"


def enterprise_api_url(enterprise_url: str) -> str:
    """Return the REST endpoint for a GitHub Enterprise server URL."""
    url = enterprise_url.rstrip("/")
    if not url.endswith("/api/v3"):
        url = f"{url}/api/v3"
    return url


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(self, token: str, base_url: str | None = None):
        """Initialize with GitHub token and an optional Enterprise server URL."""
        self.api_url = enterprise_api_url(base_url) if base_url else DEFAULT_API_URL
        self.client = Github(auth=Auth.Token(token), base_url=self.api_url)

    @classmethod
    def from_app_credentials(
        cls,
        app_id: str,
        installation_id: str,
        private_key: str,
        base_url: str | None = None,
    ) -> "GitHubClient":
        """Create a client authenticated as a GitHub App installation.

        Raises:
            ValueError: If the key is not PEM or the token exchange fails
        """
        if "-----BEGIN" not in private_key or "-----END" not in private_key:
            raise ValueError("GitHub App private key is not in PEM format")

        now = int(time.time())
        try:
            app_jwt = jwt.encode(
                {"iat": now - 60, "exp": now + 600, "iss": app_id},
                private_key,
                algorithm="RS256",
            )
        except Exception as e:
            raise ValueError(f"Cannot sign GitHub App JWT for app {app_id}: {e}") from e

        api_url = enterprise_api_url(base_url) if base_url else DEFAULT_API_URL
        response = requests.post(
            f"{api_url}/app/installations/{installation_id}/access_tokens",
            headers={
                "Authorization": f"Bearer {app_jwt}",
                "Accept": "application/vnd.github+json",
            },
            timeout=30,
        )

        if response.status_code == 401:
            raise ValueError(f"GitHub App {app_id} was rejected (401), check the private key")
        elif response.status_code == 404:
            raise ValueError(f"GitHub App installation {installation_id} not found (404)")
        elif not response.ok:
            raise ValueError(
                f"Installation token request failed ({response.status_code}): {response.text}"
            )

        return cls(response.json()["token"], base_url=base_url)

    def _get_pull(self, owner: str, repo: str, pr_number: int) -> PullRequest:
        return self.client.get_repo(f"{owner}/{repo}").get_pull(pr_number)

    def fetch_changed_files(self, owner: str, repo: str, pr_number: int) -> list[ChangeRecord]:
        """Fetch every changed file of a PR, following pagination."""
        pr = self._get_pull(owner, repo, pr_number)
        return [
            ChangeRecord(
                path=f.filename,
                status=f.status,
                additions=f.additions,
                changes=f.changes,
            )
            for f in pr.get_files()
        ]

    def fetch_labels(self, owner: str, repo: str, pr_number: int) -> set[str]:
        """Fetch the names of the labels currently applied to a PR."""
        pr = self._get_pull(owner, repo, pr_number)
        return {label.name for label in pr.get_labels()}

    def add_labels(self, owner: str, repo: str, pr_number: int, labels: Iterable[str]) -> None:
        """Add labels to a PR. Labels already present are left as they are."""
        labels = list(labels)
        if labels:
            self._get_pull(owner, repo, pr_number).add_to_labels(*labels)

    def remove_label(self, owner: str, repo: str, pr_number: int, label: str) -> None:
        """Remove a label from a PR. A label that is already gone is not an error."""
        _remove_label(self._get_pull(owner, repo, pr_number), label)

    def apply_plan(
        self, owner: str, repo: str, pr_number: int, plan: ReconciliationPlan
    ) -> None:
        """Apply a reconciliation plan: removals first, then additions."""
        if plan.is_empty:
            return
        pr = self._get_pull(owner, repo, pr_number)
        for label in sorted(plan.to_remove):
            _remove_label(pr, label)
        if plan.to_add:
            pr.add_to_labels(*sorted(plan.to_add))


def _remove_label(pr: PullRequest, label: str) -> None:
    try:
        pr.remove_from_labels(label)
    except GithubException as e:
        if e.status != 404:
            raise
