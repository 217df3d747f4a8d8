#------------------------------------------------------------
#                      stats_service.py
#        Computes star, issue and commit totals and
#                    the commit grade.

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from typing import Optional, Sequence, Tuple
from dateutil import relativedelta
from ..models import StatsResult
from .github_service import SEARCH_COMMITS_ENDPOINT, SEARCH_ISSUES_ENDPOINT, GitHubService

ISSUES_QUERY_TEMPLATE = "author:{username} type:issue"
COMMITS_QUERY_TEMPLATE = "author:{username} committer-date:>{since}"
STATS_WORKERS = 3

# Ascending (minimum commits, grade) steps; the last step reached wins.
GRADE_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (0, "C"),
    (100, "C+"),
    (250, "B"),
    (400, "B+"),
    (700, "A"),
    (1000, "A+"),
)

# This function does map a commit count onto a letter grade.
# Boundary values belong to the higher grade.
def compute_grade(commits: int, thresholds: Sequence[Tuple[int, str]] = GRADE_THRESHOLDS) -> str:
    if not thresholds:
        raise ValueError("grade thresholds must not be empty")

    ordered = sorted(thresholds, key=lambda step: step[0])
    grade = ordered[0][1]
    for minimum, letter in ordered:
        if commits >= minimum:
            grade = letter
        else:
            break
    return grade

# This function does return the lower date bound for the commit window.
# It subtracts exactly one calendar year from today.
def one_year_before(today: date) -> date:
    return today - relativedelta.relativedelta(years=1)

def total_stars(github_service: GitHubService, username: str) -> int:
    return sum(repo.star_count for repo in github_service.iter_repositories(username))

def total_issues(github_service: GitHubService, username: str) -> int:
    return github_service.search_total_count(
        SEARCH_ISSUES_ENDPOINT,
        ISSUES_QUERY_TEMPLATE.format(username=username),
    )

def commits_last_year(github_service: GitHubService, username: str, today: date) -> int:
    since = one_year_before(today).isoformat()
    return github_service.search_total_count(
        SEARCH_COMMITS_ENDPOINT,
        COMMITS_QUERY_TEMPLATE.format(username=username, since=since),
    )

# This function does gather the three stats metrics concurrently.
# Results are joined before the grade is derived; the first error propagates.
def collect_stats(
    github_service: GitHubService,
    username: str,
    today: Optional[date] = None,
    thresholds: Sequence[Tuple[int, str]] = GRADE_THRESHOLDS,
) -> StatsResult:
    if today is None:
        today = datetime.now(timezone.utc).date()

    with ThreadPoolExecutor(max_workers=STATS_WORKERS) as executor:
        stars_future = executor.submit(total_stars, github_service, username)
        issues_future = executor.submit(total_issues, github_service, username)
        commits_future = executor.submit(commits_last_year, github_service, username, today)

        stars = stars_future.result()
        issues = issues_future.result()
        commits = commits_future.result()

    return StatsResult(
        total_stars=stars,
        total_issues=issues,
        commits_last_year=commits,
        grade=compute_grade(commits, thresholds),
    )
