"""
Advisory Text Parser

Segments free-form advisory text into four numbered sections:
1. opportunities, 2. alerts, 3. recommendations, 4. tips.

Parsing never fails. Unrecognized text simply leaves the sections empty,
and the original text is always kept in `raw`.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional


# Marker -> InsightRecord field, in output order
SECTION_MARKERS = [
    ("1.", "opportunities"),
    ("2.", "alerts"),
    ("3.", "recommendations"),
    ("4.", "tips"),
]

# A line opening any numbered section
NUMBERED_LINE = re.compile(r"^\d+\.")


@dataclass(frozen=True)
class InsightRecord:
    """Structured advisory insights ready for display."""
    opportunities: str = ""
    alerts: str = ""
    recommendations: str = ""
    tips: str = ""
    raw: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "opportunities": self.opportunities,
            "alerts": self.alerts,
            "recommendations": self.recommendations,
            "tips": self.tips,
            "raw": self.raw,
        }


def split_lines(text: str) -> List[str]:
    """Split text into trimmed, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def extract_section(lines: List[str], marker: str) -> str:
    """
    Extract one section by scanning from the first line.

    The section starts at the first line containing the marker and runs
    until the next line that starts a numbered section.

    Args:
        lines: Trimmed, non-empty lines
        marker: Section marker such as '1.'

    Returns:
        Section text joined with spaces ('' if the marker is absent)
    """
    start_index = next((i for i, line in enumerate(lines) if marker in line), None)
    if start_index is None:
        return ""

    parts = [lines[start_index].replace(marker, "", 1).strip()]
    for line in lines[start_index + 1:]:
        if NUMBERED_LINE.match(line):
            break
        parts.append(line)

    return " ".join(parts)


def _parse_sequential(lines: List[str]) -> Dict[str, str]:
    """Single pass: only a line starting with a known marker opens a section."""
    fields = dict(SECTION_MARKERS)
    sections: Dict[str, List[str]] = {}
    current: Optional[str] = None

    for line in lines:
        if NUMBERED_LINE.match(line):
            marker = line.split(".", 1)[0] + "."
            current = fields.get(marker)
            if current is not None and current not in sections:
                sections[current] = [line[len(marker):].strip()]
            else:
                # Unknown or repeated number closes the open section
                current = None
            continue
        if current is not None:
            sections[current].append(line)

    return {name: " ".join(parts).strip() for name, parts in sections.items()}


def parse_advisory_text(text: Optional[str], strict: bool = False) -> InsightRecord:
    """
    Parse advisory text into an InsightRecord.

    In the default (lenient) mode every marker is searched independently
    from the top of the text, so a marker-like substring inside a sentence
    (e.g. "version 2.0") can open a section. `strict=True` parses in one
    sequential pass and only accepts markers at the start of a line.

    Args:
        text: Raw advisory text
        strict: Use sequential line-start parsing

    Returns:
        InsightRecord whose `raw` is the unmodified input
    """
    raw = text or ""
    lines = split_lines(raw)

    if strict:
        sections = _parse_sequential(lines)
    else:
        sections = {name: extract_section(lines, marker) for marker, name in SECTION_MARKERS}

    return InsightRecord(
        opportunities=sections.get("opportunities", ""),
        alerts=sections.get("alerts", ""),
        recommendations=sections.get("recommendations", ""),
        tips=sections.get("tips", ""),
        raw=raw,
    )
