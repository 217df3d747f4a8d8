#------------------------------------------------------------
#                     toolbox_service.py
#        Aggregates language bytes and detects frameworks
#              across a user's own repositories.

from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional, Set
from ..models import FrameworkRule, LanguageShare, RepositorySummary, ToolboxResult
from .github_service import GitHubService

DEFAULT_MAX_LANGUAGES = 5
DEFAULT_TOOLBOX_WORKERS = 8
MIN_GRAND_TOTAL = 1

DEFAULT_FRAMEWORK_RULES = (
    FrameworkRule("React", ("react",)),
    FrameworkRule("Spring Boot", ("spring",)),
    FrameworkRule("Express", ("express",)),
    FrameworkRule("Django", ("django",)),
    FrameworkRule("Kubernetes", ("k8s", "kubernetes")),
    FrameworkRule("Godot", ("godot",)),
)

SCANNING_MESSAGE = "Scanning languages for {count} repositories ({skipped} forks skipped)"

# This function does combine default rules with configured keyword rules.
# A configured label replaces the default rule of the same name.
def build_framework_rules(
    extra: Optional[Mapping[str, Iterable[str]]] = None,
    defaults: Iterable[FrameworkRule] = DEFAULT_FRAMEWORK_RULES,
) -> List[FrameworkRule]:
    rules: Dict[str, FrameworkRule] = {rule.label: rule for rule in defaults}
    for label, keywords in (extra or {}).items():
        cleaned = tuple(keyword.lower() for keyword in keywords if keyword)
        if cleaned:
            rules[label] = FrameworkRule(label, cleaned)
    return list(rules.values())

# This function does build the lowercase text scanned for frameworks.
def repository_text(repo: RepositorySummary) -> str:
    return f"{repo.name} {repo.description or ''} {' '.join(repo.topics)}".lower().strip()

# This function does match repository text against framework rules.
# It returns the set of canonical labels whose keywords occur in the text.
def detect_frameworks(repo: RepositorySummary, rules: Iterable[FrameworkRule]) -> Set[str]:
    text = repository_text(repo)
    return {rule.label for rule in rules if any(keyword in text for keyword in rule.keywords)}

def merge_byte_counts(totals: Mapping[str, int], languages: Mapping[str, int]) -> Dict[str, int]:
    merged = dict(totals)
    for language, byte_count in languages.items():
        merged[language] = merged.get(language, 0) + max(0, int(byte_count or 0))
    return merged

def _round_half_up(value: float) -> int:
    return int(value + 0.5)

# This function does rank language totals and compute their shares.
# Shares are taken against the grand total of every language, floored at one byte.
def rank_languages(totals: Mapping[str, int], top_n: int) -> List[LanguageShare]:
    grand_total = max(sum(totals.values()), MIN_GRAND_TOTAL)
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [
        LanguageShare(
            name=language,
            byte_count=byte_count,
            percent=_round_half_up(byte_count * 100 / grand_total),
        )
        for language, byte_count in ranked[:top_n]
    ]

# This function does aggregate languages and frameworks for one user.
# Language maps are fetched in parallel and folded; the first failure aborts.
def collect_toolbox(
    github_service: GitHubService,
    username: str,
    max_languages: int = DEFAULT_MAX_LANGUAGES,
    rules: Optional[Iterable[FrameworkRule]] = None,
    ignored_languages: Optional[Set[str]] = None,
    workers: int = DEFAULT_TOOLBOX_WORKERS,
) -> ToolboxResult:
    rules = list(DEFAULT_FRAMEWORK_RULES if rules is None else rules)
    ignored = {name.lower() for name in (ignored_languages or set())}

    repos: List[RepositorySummary] = []
    skipped = 0
    for repo in github_service.iter_repositories(username):
        if repo.is_fork:
            skipped += 1
            continue
        repos.append(repo)

    print(SCANNING_MESSAGE.format(count=len(repos), skipped=skipped))

    language_maps: List[Dict[str, int]] = []
    if repos:
        with ThreadPoolExecutor(max_workers=min(workers, len(repos))) as executor:
            language_maps = list(executor.map(github_service.fetch_languages, repos))

    totals = reduce(merge_byte_counts, language_maps, {})
    totals = {language: count for language, count in totals.items() if language.lower() not in ignored}

    frameworks: Set[str] = set()
    for repo in repos:
        frameworks |= detect_frameworks(repo, rules)

    return ToolboxResult(
        top_languages=rank_languages(totals, max_languages),
        frameworks=sorted(frameworks),
    )
