#------------------------------------------------------------
#                          config.py
#   Centralizes constants, environment parsing and JSON
#                  config loading helpers.

import json
import os
from typing import Dict, List, Mapping, Optional, Set

from .models import CardConfig, Identity

# Environment variable names for configuration
ENV_GITHUB_USERNAME = "GITHUB_USERNAME"
ENV_GITHUB_DISPLAY_NAME = "GITHUB_DISPLAY_NAME"
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_OUTPUT_DIR = "OUTPUT_DIR"
ENV_TOOLBOX_LAYOUT = "TOOLBOX_LAYOUT"
ENV_TOOLBOX_MAX_LANGUAGES = "TOOLBOX_MAX_LANGUAGES"
ENV_TOOLBOX_MAX_ITEMS = "TOOLBOX_MAX_ITEMS"
ENV_TOOLBOX_WORKERS = "TOOLBOX_WORKERS"
ENV_REQUEST_TIMEOUT = "GITHUB_REQUEST_TIMEOUT"

# Default values for configuration parameters
DEFAULT_GITHUB_USERNAME = "its-me-mayday"
DEFAULT_GITHUB_DISPLAY_NAME = "Luca Maggio"
DEFAULT_OUTPUT_DIR = "."
DEFAULT_TOOLBOX_MAX_ITEMS = 8
DEFAULT_TOOLBOX_WORKERS = 8

# Toolbox layouts and their default language counts.
TOOLBOX_LAYOUT_LIST = "list"
TOOLBOX_LAYOUT_BARS = "bars"
TOOLBOX_LAYOUT_LANGUAGES = {
    TOOLBOX_LAYOUT_LIST: 5,
    TOOLBOX_LAYOUT_BARS: 6,
}

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_USER_AGENT = "github-stat-cards"
GITHUB_REPOS_PER_PAGE = 100
GITHUB_SEARCH_PER_PAGE = 1

# Output artifact names
STATS_CARD_FILENAME = "card.svg"
TOOLBOX_CARD_FILENAME = "toolbox.svg"
CARD_STATS = "stats"
CARD_TOOLBOX = "toolbox"
ALL_CARDS = (CARD_STATS, CARD_TOOLBOX)

MISSING_TOKEN_MESSAGE = "Missing GITHUB_TOKEN"
INVALID_NUMBER_MESSAGE = "{name} must be a positive number, got {value!r}"
INVALID_LAYOUT_MESSAGE = "{name} must be one of {choices}, got {value!r}"

# Directory paths for the project and configuration files.
SCRIPTS_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_DIR = os.path.join(SCRIPTS_DIR, "config")
IGNORE_LANGUAGES_PATH = os.path.join(CONFIG_DIR, "language_ignore_list.json")
FRAMEWORK_KEYWORDS_PATH = os.path.join(CONFIG_DIR, "framework_keywords.json")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""


def _positive_int(environ: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(INVALID_NUMBER_MESSAGE.format(name=name, value=raw))
    if value <= 0:
        raise ConfigurationError(INVALID_NUMBER_MESSAGE.format(name=name, value=raw))
    return value


def _positive_float(environ: Mapping[str, str], name: str) -> Optional[float]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(INVALID_NUMBER_MESSAGE.format(name=name, value=raw))
    if value <= 0:
        raise ConfigurationError(INVALID_NUMBER_MESSAGE.format(name=name, value=raw))
    return value


# This function does build the run configuration from an environment mapping.
# It fails before any network call when the token is absent.
def load_config(environ: Mapping[str, str]) -> CardConfig:
    token = (environ.get(ENV_GITHUB_TOKEN) or "").strip()
    if not token:
        raise ConfigurationError(MISSING_TOKEN_MESSAGE)

    layout = (environ.get(ENV_TOOLBOX_LAYOUT) or TOOLBOX_LAYOUT_LIST).strip().lower()
    if layout not in TOOLBOX_LAYOUT_LANGUAGES:
        raise ConfigurationError(
            INVALID_LAYOUT_MESSAGE.format(
                name=ENV_TOOLBOX_LAYOUT,
                choices=", ".join(sorted(TOOLBOX_LAYOUT_LANGUAGES)),
                value=layout,
            )
        )

    identity = Identity(
        username=(environ.get(ENV_GITHUB_USERNAME) or DEFAULT_GITHUB_USERNAME).strip(),
        display_name=(environ.get(ENV_GITHUB_DISPLAY_NAME) or DEFAULT_GITHUB_DISPLAY_NAME).strip(),
    )

    return CardConfig(
        identity=identity,
        github_token=token,
        output_dir=environ.get(ENV_OUTPUT_DIR) or DEFAULT_OUTPUT_DIR,
        toolbox_layout=layout,
        toolbox_max_languages=_positive_int(
            environ, ENV_TOOLBOX_MAX_LANGUAGES, TOOLBOX_LAYOUT_LANGUAGES[layout]
        ),
        toolbox_max_items=_positive_int(environ, ENV_TOOLBOX_MAX_ITEMS, DEFAULT_TOOLBOX_MAX_ITEMS),
        toolbox_workers=_positive_int(environ, ENV_TOOLBOX_WORKERS, DEFAULT_TOOLBOX_WORKERS),
        request_timeout=_positive_float(environ, ENV_REQUEST_TIMEOUT),
    )

# This function does load JSON content from disk safely.
# It returns None when the file is missing or invalid.
def _load_json(path: str):
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as file_handle:
            return json.load(file_handle)
    except (OSError, ValueError):
        return None

# This function does load the language ignore list.
# It returns normalized lowercase language names as a set.
def load_ignored_languages(path: str = IGNORE_LANGUAGES_PATH) -> Set[str]:
    data = _load_json(path)
    if not isinstance(data, list):
        return set()
    return {str(item).strip().lower() for item in data if str(item).strip()}

# This function does load extra framework keyword rules.
# It maps each canonical label to its lowercase keywords.
def load_framework_keywords(path: str = FRAMEWORK_KEYWORDS_PATH) -> Dict[str, List[str]]:
    data = _load_json(path)
    if not isinstance(data, dict):
        return {}

    rules: Dict[str, List[str]] = {}
    for label, keywords in data.items():
        label = str(label).strip()
        if not label or not isinstance(keywords, list):
            continue
        cleaned = [str(keyword).strip().lower() for keyword in keywords if str(keyword).strip()]
        if cleaned:
            rules[label] = cleaned
    return rules
