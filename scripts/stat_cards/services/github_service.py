#------------------------------------------------------------
#                      github_service.py
#               Handles GitHub API requests and
#                      response shaping.

from typing import Any, Dict, Iterator, Optional
import requests
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_REPOS_PER_PAGE,
    GITHUB_SEARCH_PER_PAGE,
    GITHUB_USER_AGENT,
)
from ..models import CardConfig, RepositorySummary

USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
LANGUAGES_ENDPOINT_TEMPLATE = "/repos/{owner}/{name}/languages"
SEARCH_ISSUES_ENDPOINT = "/search/issues"
SEARCH_COMMITS_ENDPOINT = "/search/commits"

PAGE_RESULT_MESSAGE = "Page {page}: Found {count} repositories"
API_ERROR_TEMPLATE = "GitHub API error {status} for {path}: {body}"


class ApiError(Exception):
    """Raised for any failed GitHub API call.

    Covers non-2xx responses, bodies that are not valid JSON and transport
    failures. ``status_code`` is None when no response was received.
    """

    def __init__(self, status_code: Optional[int], path: str, body: str):
        self.status_code = status_code
        self.path = path
        self.body = body
        super().__init__(API_ERROR_TEMPLATE.format(status=status_code, path=path, body=body))


class GitHubService:

    # This function does initialize service state.
    # It stores runtime configuration used by API methods.
    def __init__(self, config: CardConfig):
        self.config = config

    # This function does build request headers for GitHub API calls.
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.github_token}",
            "User-Agent": GITHUB_USER_AGENT,
            "Accept": GITHUB_API_ACCEPT_HEADER,
        }

    # This function does issue one authenticated GET and decode its JSON body.
    # Every failure is raised as ApiError carrying status, path and body.
    def request_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{GITHUB_API_BASE_URL}{path}"
        try:
            response = requests.get(
                url,
                headers=self.headers(),
                params=params,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            raise ApiError(None, path, str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, path, response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(response.status_code, path, response.text) from exc

    # This function does walk a listing endpoint page by page.
    # It stops at the first empty page and yields items in upstream order.
    def iter_pages(self, path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
        page = 1
        while True:
            page_params = dict(params or {})
            page_params["per_page"] = GITHUB_REPOS_PER_PAGE
            page_params["page"] = page

            data = self.request_json(path, page_params)
            if not data:
                return

            print(PAGE_RESULT_MESSAGE.format(page=page, count=len(data)))
            for item in data:
                yield item
            page += 1

    def iter_repositories(self, username: str) -> Iterator[RepositorySummary]:
        path = USER_REPOS_ENDPOINT_TEMPLATE.format(username=username)
        for repo in self.iter_pages(path):
            yield RepositorySummary(
                owner=(repo.get("owner") or {}).get("login") or username,
                name=repo["name"],
                is_fork=bool(repo.get("fork")),
                star_count=int(repo.get("stargazers_count") or 0),
                description=repo.get("description"),
                topics=list(repo.get("topics") or []),
            )

    # This function does fetch language byte counts for one repository.
    def fetch_languages(self, repo: RepositorySummary) -> Dict[str, int]:
        path = LANGUAGES_ENDPOINT_TEMPLATE.format(owner=repo.owner, name=repo.name)
        data = self.request_json(path)
        if not isinstance(data, dict):
            return {}
        return {str(language): int(byte_count or 0) for language, byte_count in data.items()}

    # This function does run a search query and return only its total count.
    def search_total_count(self, endpoint: str, query: str) -> int:
        result = self.request_json(endpoint, {"q": query, "per_page": GITHUB_SEARCH_PER_PAGE})
        if not isinstance(result, dict):
            return 0
        return int(result.get("total_count") or 0)
