#------------------------------------------------------------
#                        controller.py
#         Coordinates aggregation, rendering and writing
#                     of the stat cards.

import sys
from datetime import date
from typing import Dict, Optional, Sequence
from .config import (
    ALL_CARDS,
    CARD_STATS,
    CARD_TOOLBOX,
    STATS_CARD_FILENAME,
    TOOLBOX_CARD_FILENAME,
    load_framework_keywords,
    load_ignored_languages,
)
from .models import CardConfig, GenerationResult
from .services.github_service import ApiError, GitHubService
from .services.output_service import save_cards
from .services.stats_service import collect_stats
from .services.toolbox_service import build_framework_rules, collect_toolbox
from .views.svg_view import render_stats_card, render_toolbox_card

# This function does fetch the stats metrics and render the stats card.
def build_stats_card(config: CardConfig, github_service: GitHubService, today: Optional[date] = None) -> str:
    identity = config.identity
    print(f"Generating stats for {identity.username}...")
    stats = collect_stats(github_service, identity.username, today=today)
    print(
        f"  stars={stats.total_stars} issues={stats.total_issues} "
        f"commits={stats.commits_last_year} grade={stats.grade}"
    )
    return render_stats_card(stats, identity.display_name)

# This function does aggregate languages and frameworks and render the toolbox card.
def build_toolbox_card(config: CardConfig, github_service: GitHubService) -> str:
    identity = config.identity
    print(f"Generating toolbox for {identity.username}...")

    ignored_languages = load_ignored_languages()
    framework_keywords = load_framework_keywords()
    if ignored_languages:
        print(f"Loaded ignored languages: {len(ignored_languages)}")
    if framework_keywords:
        print(f"Loaded framework keyword rules: {len(framework_keywords)}")

    toolbox = collect_toolbox(
        github_service,
        identity.username,
        max_languages=config.toolbox_max_languages,
        rules=build_framework_rules(framework_keywords),
        ignored_languages=ignored_languages,
        workers=config.toolbox_workers,
    )
    for language in toolbox.top_languages:
        print(f"  {language.name}: {language.byte_count} bytes ({language.percent}%)")
    if toolbox.frameworks:
        print(f"  frameworks: {', '.join(toolbox.frameworks)}")
    return render_toolbox_card(toolbox, config.toolbox_max_items, config.toolbox_layout)

# This function does execute the full generation workflow end-to-end.
# Every requested card is rendered before any file is written.
def run_generation(
    config: CardConfig,
    cards: Sequence[str] = ALL_CARDS,
    github_service: Optional[GitHubService] = None,
    today: Optional[date] = None,
) -> GenerationResult:
    github_service = github_service or GitHubService(config)

    documents: Dict[str, str] = {}
    try:
        if CARD_STATS in cards:
            documents[STATS_CARD_FILENAME] = build_stats_card(config, github_service, today)
        if CARD_TOOLBOX in cards:
            documents[TOOLBOX_CARD_FILENAME] = build_toolbox_card(config, github_service)
    except ApiError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return GenerationResult(error=str(exc))

    written = save_cards(config.output_dir, documents)
    for path in written:
        print(f"{path} updated")
    return GenerationResult(written=written)
