"""GitHub REST API commit source."""

from typing import Any, Dict, Iterator, List, Optional
import requests
from ..utils.errors import CommitSourceError
from ..utils.logging import get_logger
from .base import CommitSource

logger = get_logger("source.github")

DEFAULT_API_URL = "https://api.github.com"

PAGE_SIZE = 100


class GitHubCommitSource(CommitSource):
    """Commit source backed by the GitHub REST API."""

    def __init__(
        self,
        repository: str,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0
    ):
        """
        Initialize GitHub commit source.

        Args:
            repository: Repository in format "owner/repo"
            token: GitHub token
            api_url: REST API base URL (GitHub Enterprise servers differ)
            session: Optional requests session to reuse
            timeout: Per-request timeout in seconds

        Raises:
            CommitSourceError: If repository is malformed
        """
        if not repository or "/" not in repository:
            raise CommitSourceError(f"Invalid repository format: {repository}. Expected 'owner/repo'")

        self.owner, self.repo = repository.split("/", 1)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"token {token}",
            "Accept": "application/vnd.github.v3+json"
        })

    def get_commit_files(self, ref: str) -> List[Dict[str, Any]]:
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}/commits/{ref}"
        files = []
        for page in self._paginate(url, f"commit {ref}"):
            files.extend(page.get("files") or [])
        logger.debug(f"Commit {ref} touched {len(files)} file(s)")
        return files

    def list_pull_request_commits(self, commits_url: str) -> List[Dict[str, Any]]:
        commits = []
        for page in self._paginate(commits_url, "pull request commits"):
            if not isinstance(page, list):
                raise CommitSourceError(f"Unexpected commit listing from {commits_url}")
            commits.extend(page)
        logger.info(f"Pull request has {len(commits)} commit(s)")
        return commits

    def _paginate(self, url: str, what: str) -> Iterator[Any]:
        """Yield each decoded page, following Link rel="next" headers."""
        params: Optional[Dict[str, Any]] = {"per_page": PAGE_SIZE}
        next_url: Optional[str] = url

        while next_url:
            response = self._get(next_url, params, what)
            try:
                page = response.json()
            except ValueError as e:
                raise CommitSourceError(f"GitHub returned invalid JSON for {what}: {e}")
            yield page
            next_url = response.links.get("next", {}).get("url")
            # next links already carry the query string
            params = None

    def _get(self, url: str, params: Optional[Dict[str, Any]], what: str) -> requests.Response:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 401:
                raise CommitSourceError("GitHub authentication failed. Check your github-token.")
            elif status == 404:
                raise CommitSourceError(f"Repository or {what} not found: {self.owner}/{self.repo}")
            else:
                error_msg = e.response.text if e.response is not None else str(e)
                raise CommitSourceError(f"GitHub API error while fetching {what}: {error_msg}")

        except requests.exceptions.RequestException as e:
            raise CommitSourceError(f"Failed to fetch {what} from GitHub: {e}")
