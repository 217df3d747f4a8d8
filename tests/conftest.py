"""
Shared fixtures: a fake GitHub REST API routed through a patched
``requests.get`` so the whole pipeline runs without network access.
"""
import json
from unittest.mock import patch

import pytest

from stat_cards.config import GITHUB_API_BASE_URL
from stat_cards.models import CardConfig, Identity

USERNAME = "octo"


class FakeResp:
    def __init__(self, payload, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


def make_repo(name, stars=0, fork=False, description=None, topics=None, owner=USERNAME):
    return {
        "name": name,
        "owner": {"login": owner},
        "fork": fork,
        "stargazers_count": stars,
        "description": description,
        "topics": topics or [],
    }


class FakeGitHub:
    """Answers the four endpoints the card pipeline consumes."""

    def __init__(self):
        self.repo_pages = []
        self.languages = {}
        self.issue_count = 0
        self.commit_count = 0
        self.errors = {}
        self.calls = []

    def __call__(self, url, headers=None, params=None, timeout=None):
        path = url[len(GITHUB_API_BASE_URL):]
        params = dict(params or {})
        self.calls.append((path, params, headers, timeout))

        if path in self.errors:
            status_code, body = self.errors[path]
            return FakeResp(None, status_code=status_code, text=body)

        if path.startswith("/users/") and path.endswith("/repos"):
            page = params["page"]
            data = self.repo_pages[page - 1] if page <= len(self.repo_pages) else []
            return FakeResp(data)
        if path.endswith("/languages"):
            name = path.split("/")[3]
            return FakeResp(self.languages.get(name, {}))
        if path == "/search/issues":
            return FakeResp({"total_count": self.issue_count, "items": []})
        if path == "/search/commits":
            return FakeResp({"total_count": self.commit_count, "items": []})
        return FakeResp({"message": "Not Found"}, status_code=404)

    def paths(self):
        return [call[0] for call in self.calls]

    def params_for(self, path):
        return [call[1] for call in self.calls if call[0] == path]


@pytest.fixture
def fake_github():
    fake = FakeGitHub()
    with patch("requests.get", side_effect=fake):
        yield fake


@pytest.fixture
def card_config(tmp_path):
    return CardConfig(
        identity=Identity(username=USERNAME, display_name="Octo Cat"),
        github_token="t0ken",
        output_dir=str(tmp_path / "out"),
    )
