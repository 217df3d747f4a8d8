from unittest.mock import patch

import pytest
import requests

from conftest import FakeResp, make_repo
from stat_cards.services.github_service import ApiError, GitHubService


def test_headers_carry_token_agent_and_accept(card_config):
    headers = GitHubService(card_config).headers()
    assert headers["Authorization"] == "Bearer t0ken"
    assert headers["User-Agent"] == "github-stat-cards"
    assert headers["Accept"] == "application/vnd.github+json"


def test_request_json_returns_parsed_body(card_config, fake_github):
    fake_github.issue_count = 4
    service = GitHubService(card_config)

    body = service.request_json("/search/issues", {"q": "author:octo"})

    assert body["total_count"] == 4
    path, params, headers, timeout = fake_github.calls[0]
    assert path == "/search/issues"
    assert params == {"q": "author:octo"}
    assert headers["Authorization"] == "Bearer t0ken"
    assert timeout is None


def test_request_json_uses_configured_timeout(card_config, fake_github):
    card_config.request_timeout = 12.5
    GitHubService(card_config).request_json("/search/issues")
    assert fake_github.calls[0][3] == 12.5


def test_non_success_status_raises_api_error(card_config, fake_github):
    fake_github.errors["/search/issues"] = (403, "rate limited")

    with pytest.raises(ApiError) as excinfo:
        GitHubService(card_config).request_json("/search/issues")

    error = excinfo.value
    assert error.status_code == 403
    assert error.path == "/search/issues"
    assert error.body == "rate limited"
    assert str(error) == "GitHub API error 403 for /search/issues: rate limited"


def test_malformed_json_raises_api_error(card_config):
    response = FakeResp(ValueError("Expecting value"), status_code=200, text="<html>")
    with patch("requests.get", return_value=response):
        with pytest.raises(ApiError) as excinfo:
            GitHubService(card_config).request_json("/users/octo/repos")

    assert excinfo.value.status_code == 200
    assert excinfo.value.body == "<html>"


def test_transport_failure_raises_api_error_without_status(card_config):
    with patch("requests.get", side_effect=requests.ConnectionError("connection refused")):
        with pytest.raises(ApiError) as excinfo:
            GitHubService(card_config).request_json("/search/commits")

    assert excinfo.value.status_code is None
    assert excinfo.value.path == "/search/commits"
    assert "connection refused" in excinfo.value.body


def test_iter_pages_stops_at_first_empty_page(card_config, fake_github):
    fake_github.repo_pages = [
        [make_repo(f"repo-{index}") for index in range(100)],
        [make_repo("repo-100"), make_repo("repo-101")],
    ]

    items = list(GitHubService(card_config).iter_pages("/users/octo/repos"))

    assert [item["name"] for item in items] == [f"repo-{index}" for index in range(102)]
    pages = fake_github.params_for("/users/octo/repos")
    assert [params["page"] for params in pages] == [1, 2, 3]
    assert all(params["per_page"] == 100 for params in pages)


def test_iter_pages_on_empty_listing_issues_one_request(card_config, fake_github):
    assert list(GitHubService(card_config).iter_pages("/users/octo/repos")) == []
    assert fake_github.paths() == ["/users/octo/repos"]


def test_iter_pages_keeps_duplicates_across_pages(card_config, fake_github):
    fake_github.repo_pages = [[make_repo("same")], [make_repo("same")]]
    items = list(GitHubService(card_config).iter_pages("/users/octo/repos"))
    assert [item["name"] for item in items] == ["same", "same"]


def test_iter_pages_propagates_page_failure(card_config):
    responses = [FakeResp([make_repo("a")]), FakeResp(None, status_code=502, text="bad gateway")]
    with patch("requests.get", side_effect=responses):
        pages = GitHubService(card_config).iter_pages("/users/octo/repos")
        assert next(pages)["name"] == "a"
        with pytest.raises(ApiError) as excinfo:
            next(pages)

    assert excinfo.value.status_code == 502


def test_iter_repositories_maps_summary_fields(card_config, fake_github):
    missing_fields = {"name": "bare", "owner": {"login": "octo"}}
    fake_github.repo_pages = [[
        make_repo("tools", stars=3, fork=True, description="CLI", topics=["cli", "go"]),
        missing_fields,
    ]]

    repos = list(GitHubService(card_config).iter_repositories("octo"))

    assert repos[0].owner == "octo"
    assert repos[0].name == "tools"
    assert repos[0].is_fork is True
    assert repos[0].star_count == 3
    assert repos[0].description == "CLI"
    assert repos[0].topics == ["cli", "go"]
    assert repos[1].is_fork is False
    assert repos[1].star_count == 0
    assert repos[1].description is None
    assert repos[1].topics == []


def test_fetch_languages_uses_repository_owner(card_config, fake_github):
    fake_github.repo_pages = [[make_repo("lib", owner="octo-org")]]
    fake_github.languages["lib"] = {"Go": 10, "Shell": 2}
    service = GitHubService(card_config)
    repo = next(service.iter_repositories("octo"))

    assert service.fetch_languages(repo) == {"Go": 10, "Shell": 2}
    assert "/repos/octo-org/lib/languages" in fake_github.paths()


def test_search_total_count_reads_only_the_count(card_config, fake_github):
    fake_github.commit_count = 321
    service = GitHubService(card_config)

    assert service.search_total_count("/search/commits", "author:octo") == 321
    assert fake_github.params_for("/search/commits") == [{"q": "author:octo", "per_page": 1}]
