#------------------------------------------------------------
#                          models.py
#     Defines dataclasses used by the card pipeline.

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

@dataclass(frozen=True)
class Identity:
    username: str
    display_name: str

@dataclass
class CardConfig:
    identity: Identity
    github_token: str
    output_dir: str = "."
    toolbox_layout: str = "list"
    toolbox_max_languages: int = 5
    toolbox_max_items: int = 8
    toolbox_workers: int = 8
    request_timeout: Optional[float] = None

@dataclass
class RepositorySummary:
    owner: str
    name: str
    is_fork: bool
    star_count: int
    description: Optional[str] = None
    topics: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class FrameworkRule:
    label: str
    keywords: Tuple[str, ...]

@dataclass
class LanguageShare:
    name: str
    byte_count: int
    percent: int

@dataclass
class StatsResult:
    total_stars: int
    total_issues: int
    commits_last_year: int
    grade: str

@dataclass
class ToolboxItem:
    label: str
    kind: str
    percent: Optional[int] = None

@dataclass
class ToolboxResult:
    top_languages: List[LanguageShare]
    frameworks: List[str]

    # This function does build the combined display list.
    # Languages come first, then frameworks, truncated to max_items.
    def items(self, max_items: int) -> List[ToolboxItem]:
        combined = [ToolboxItem(label=lang.name, kind="lang", percent=lang.percent) for lang in self.top_languages]
        combined.extend(ToolboxItem(label=name, kind="fw") for name in self.frameworks)
        return combined[:max_items]

@dataclass
class GenerationResult:
    written: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
