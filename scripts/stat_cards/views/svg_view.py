#------------------------------------------------------------
#                        svg_view.py
#            Renders the stats and toolbox cards
#                     as SVG documents.

from html import escape
from typing import List
from ..models import StatsResult, ToolboxItem, ToolboxResult

DEFAULT_LANGUAGE_COLOR = "#35c0ff"
DEFAULT_FRAMEWORK_COLOR = "#a1003b"

LANGUAGE_COLORS = {
    "TypeScript": "#3178c6",
    "JavaScript": "#f1e05a",
    "Python": "#3572A5",
    "Go": "#00ADD8",
    "Java": "#b07219",
    "C#": "#178600",
    "C++": "#f34b7d",
    "C": "#555555",
    "Shell": "#89e051",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "Ruby": "#701516",
    "Rust": "#dea584",
    "Lua": "#000080",
    "HCL": "#844FBA",
    "Kotlin": "#A97BFF",
    "Swift": "#ffac45",
    "Objective-C": "#438eff",
    "Scala": "#c22d40",
    "PHP": "#4F5D95",
}

FRAMEWORK_COLORS = {
    "React": "#61dafb",
    "Spring Boot": "#6DB33F",
    "Express": "#f0db4f",
    "Django": "#092E20",
    "Kubernetes": "#326ce5",
    "Godot": "#478cbf",
}

SANS_FONT = "system-ui, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif"
SERIF_FONT = "Georgia, 'Times New Roman', Times, serif"
MONO_FONT = "ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, 'Liberation Mono', monospace"

CARD_FRAME_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg width="520" height="190" viewBox="0 0 520 190" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="bg{suffix}" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" stop-color="#05040a"/>
      <stop offset="40%" stop-color="#0b0f1f"/>
      <stop offset="100%" stop-color="#020309"/>
    </linearGradient>
    <linearGradient id="border{suffix}" x1="0%" y1="0%" x2="100%" y2="0%">
      <stop offset="0%" stop-color="#ff1133"/>
      <stop offset="50%" stop-color="#ff3355"/>
      <stop offset="100%" stop-color="#ff1133"/>
    </linearGradient>
    <filter id="glow{suffix}" x="-40%" y="-40%" width="180%" height="180%">
      <feDropShadow dx="0" dy="0" stdDeviation="9" flood-color="#ff1133" flood-opacity="0.75"/>
      <feDropShadow dx="0" dy="0" stdDeviation="18" flood-color="#a1003b" flood-opacity="0.75"/>
    </filter>
    <linearGradient id="vignette{suffix}" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" stop-color="#ff1133" stop-opacity="0.2"/>
      <stop offset="40%" stop-color="#000000" stop-opacity="0"/>
      <stop offset="100%" stop-color="#35c0ff" stop-opacity="0.2"/>
    </linearGradient>
    <radialGradient id="innerCircle{suffix}" cx="50%" cy="35%" r="70%">
      <stop offset="0%" stop-color="#141828"/>
      <stop offset="100%" stop-color="#020309"/>
    </radialGradient>
    <linearGradient id="ring{suffix}" x1="0%" y1="0%" x2="100%" y2="0%">
      <stop offset="0%" stop-color="#ff1133"/>
      <stop offset="45%" stop-color="#ff3355"/>
      <stop offset="100%" stop-color="#35c0ff"/>
    </linearGradient>
  </defs>

  <rect x="8" y="8" rx="22" ry="22" width="504" height="174"
        fill="url(#bg{suffix})" stroke="url(#border{suffix})" stroke-width="2"
        filter="url(#glow{suffix})"/>
  <rect x="8" y="8" rx="22" ry="22" width="504" height="174" fill="url(#vignette{suffix})"/>

  <text x="30" y="48" font-family="{serif}" font-size="18" font-weight="700"
        letter-spacing="5" fill="#ff3355">{title}</text>
  <line x1="30" y1="56" x2="360" y2="56" stroke="#25293a" stroke-width="1"/>
{body}
</svg>
"""

STAT_ROW_TEMPLATE = """
  <text x="38" y="{y}" font-family="{sans}" font-size="16" fill="{icon_color}">{icon}</text>
  <text x="68" y="{y}" font-family="{sans}" font-size="13" font-weight="500" fill="#98a3b3">{label}</text>
  <text x="305" y="{y}" text-anchor="end" font-family="{mono}" font-size="14"
        font-weight="600" fill="#e8ecf2">{value}</text>"""

GRADE_RING_TEMPLATE = """
  <g transform="translate(410, 102)">
    <circle cx="0" cy="0" r="60" fill="#ff1133" opacity="0.09"/>
    <circle cx="0" cy="0" r="50" fill="none" stroke="url(#ring{suffix})" stroke-width="9"/>
    <circle cx="0" cy="0" r="36" fill="url(#innerCircle{suffix})"
            stroke="rgba(255,255,255,0.15)" stroke-width="1.2"/>
    <text x="0" y="6" text-anchor="middle" font-family="{serif}" font-size="26"
          font-weight="700" letter-spacing="5" fill="#f5f7ff">{grade}</text>
  </g>"""

LIST_ROW_TEMPLATE = """
  <circle cx="40" cy="{dot_y}" r="5" fill="{color}"/>
  <text x="60" y="{y}" font-family="{sans}" font-size="13" font-weight="500" fill="#e8ecf2">{label}</text>{percent}"""

LIST_PERCENT_TEMPLATE = """
  <text x="300" y="{y}" text-anchor="end" font-family="{mono}" font-size="12" fill="#98a3b3">{percent}%</text>"""

BAR_ROW_TEMPLATE = """
  <text x="30" y="{y}" font-family="{sans}" font-size="12" font-weight="500" fill="#e8ecf2">{label}</text>
  <rect x="150" y="{bar_y}" rx="3" ry="3" width="290" height="7" fill="#25293a"/>
  <rect x="150" y="{bar_y}" rx="3" ry="3" width="{width}" height="7" fill="{color}"/>
  <text x="490" y="{y}" text-anchor="end" font-family="{mono}" font-size="12" fill="#98a3b3">{percent}%</text>"""

EMPTY_TOOLBOX_TEMPLATE = """
  <text x="30" y="100" font-family="{sans}" font-size="13" fill="#98a3b3">No language data available yet.</text>"""

STATS_SUFFIX = "Stats"
TOOLBOX_SUFFIX = "Toolbox"
STATS_TITLE_TEMPLATE = "{display_name}'s GitHub Stats"
TOOLBOX_TITLE = "Hawkins Toolbox"
LIST_BASE_Y = 78
LIST_ROW_GAP = 15
BAR_BASE_Y = 80
BAR_ROW_GAP = 16
BAR_MAX_WIDTH = 290

def language_color(name: str) -> str:
    return LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR)

def framework_color(name: str) -> str:
    return FRAMEWORK_COLORS.get(name, DEFAULT_FRAMEWORK_COLOR)

def _render_card(suffix: str, title: str, body: str) -> str:
    return CARD_FRAME_TEMPLATE.format(
        suffix=suffix,
        serif=SERIF_FONT,
        title=escape(title, quote=False),
        body=body,
    )

# This function does render the stats card with stars, commits, issues and grade.
def render_stats_card(stats: StatsResult, display_name: str) -> str:
    rows = [
        ("#ffdf5d", "★", "Total Stars Earned:", stats.total_stars),
        ("#35c0ff", "◷", "Total Commits (last year):", stats.commits_last_year),
        ("#ff3355", "!", "Total Issues:", stats.total_issues),
    ]
    body = "".join(
        STAT_ROW_TEMPLATE.format(
            y=88 + index * 30,
            sans=SANS_FONT,
            mono=MONO_FONT,
            icon_color=icon_color,
            icon=icon,
            label=label,
            value=value,
        )
        for index, (icon_color, icon, label, value) in enumerate(rows)
    )
    body += GRADE_RING_TEMPLATE.format(suffix=STATS_SUFFIX, serif=SERIF_FONT, grade=escape(stats.grade, quote=False))
    return _render_card(STATS_SUFFIX, STATS_TITLE_TEMPLATE.format(display_name=display_name), body)

def _render_list_rows(items: List[ToolboxItem]) -> str:
    rows = []
    for index, item in enumerate(items):
        y = LIST_BASE_Y + index * LIST_ROW_GAP
        color = language_color(item.label) if item.kind == "lang" else framework_color(item.label)
        percent = ""
        if item.percent is not None:
            percent = LIST_PERCENT_TEMPLATE.format(y=y, mono=MONO_FONT, percent=item.percent)
        rows.append(
            LIST_ROW_TEMPLATE.format(
                dot_y=y - 4,
                y=y,
                color=color,
                sans=SANS_FONT,
                label=escape(item.label, quote=False),
                percent=percent,
            )
        )
    return "".join(rows)

def _render_bar_rows(toolbox: ToolboxResult) -> str:
    rows = []
    for index, language in enumerate(toolbox.top_languages):
        y = BAR_BASE_Y + index * BAR_ROW_GAP
        rows.append(
            BAR_ROW_TEMPLATE.format(
                y=y,
                bar_y=y - 7,
                sans=SANS_FONT,
                mono=MONO_FONT,
                label=escape(language.name, quote=False),
                width=round(BAR_MAX_WIDTH * min(language.percent, 100) / 100, 1),
                color=language_color(language.name),
                percent=language.percent,
            )
        )
    return "".join(rows)

# This function does render the toolbox card in the requested layout.
# The list layout shows languages then frameworks; bars shows languages only.
def render_toolbox_card(toolbox: ToolboxResult, max_items: int, layout: str = "list") -> str:
    if layout == "bars":
        body = _render_bar_rows(toolbox)
    else:
        body = _render_list_rows(toolbox.items(max_items))

    if not body:
        body = EMPTY_TOOLBOX_TEMPLATE.format(sans=SANS_FONT)
    return _render_card(TOOLBOX_SUFFIX, TOOLBOX_TITLE, body)
