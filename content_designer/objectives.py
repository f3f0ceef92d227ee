"""
Parser that splits a learning-objectives run into title, subheading and items.
"""
import html
import re
from dataclasses import dataclass, field
from typing import List

from .html_utils import extract_list_items, html_to_lines, strip_html
from .models import ContentBlock

DEFAULT_TITLE = 'Learning Objectives'
DEFAULT_SUB_HEADING = 'By the end of this section, you will be able to:'
MIN_OBJECTIVE_LENGTH = 5

_BOLD_MARKER_RE = re.compile(r'^\*\*|\*\*$')
_OBJECTIVE_MARKERS = (
    re.compile(r'^\d+\.\s*'),
    re.compile(r'^[a-zA-Z]\.\s*'),
    re.compile(r'^[•·▪▫‣⁃-]\s*'),
)
_SUB_HEADING_START_RE = re.compile(r'^(this|the|by|after)', re.IGNORECASE)

TITLE_CUES = ('objective', 'goal', 'outcome', 'learn', 'will i')
SUB_HEADING_CUES = ('will be able to', 'you will', 'skills and knowledge', 'by the end',
                    'after this', 'provide you')


@dataclass
class Objectives:
    """Title, subheading and items of a learning-objectives component, as HTML"""
    title: str = DEFAULT_TITLE
    sub_heading: str = DEFAULT_SUB_HEADING
    objectives: List[str] = field(default_factory=list)


def clean_title(text: str) -> str:
    """Strip markdown bold markers from a title line"""
    return _BOLD_MARKER_RE.sub('', text).strip()


def is_likely_title(text: str) -> bool:
    if not text or len(text) > 100:
        return False
    lowered = clean_title(text).lower()
    return (any(cue in lowered for cue in TITLE_CUES)
            or text.upper() == text
            or text.endswith('?'))


def is_likely_sub_heading(text: str) -> bool:
    if not text or len(text) > 300:
        return False
    lowered = clean_title(text).lower()
    return (any(cue in lowered for cue in SUB_HEADING_CUES)
            or bool(_SUB_HEADING_START_RE.match(lowered)))


def clean_objective(text: str) -> str:
    """Strip bold markers, enumerators and bullets from one objective"""
    cleaned = _BOLD_MARKER_RE.sub('', text.strip())
    for marker in _OBJECTIVE_MARKERS:
        cleaned = marker.sub('', cleaned, count=1)
    return re.sub(r'\s+', ' ', cleaned).strip()


def _parse_lines(lines: List[str]) -> Objectives:
    result = Objectives()
    if not lines:
        return result

    index = 0
    if index < len(lines) and is_likely_title(lines[index]):
        result.title = html.escape(clean_title(lines[index]), quote=False)
        index += 1

    if index < len(lines) and is_likely_sub_heading(lines[index]):
        result.sub_heading = html.escape(clean_title(lines[index]), quote=False)
        index += 1

    cleaned = (clean_objective(line) for line in lines[index:])
    result.objectives = [html.escape(item, quote=False) for item in cleaned
                         if len(item) > MIN_OBJECTIVE_LENGTH]
    return result


def parse_objectives(blocks: List[ContentBlock], has_objective_cues: bool = True) -> Objectives:
    """
    Parse a learning-objectives run

    Args:
        blocks: The block run the component was applied to
        has_objective_cues: Whether the classifier saw objective wording in the run

    Returns:
        Objectives with defaults filled in where nothing was detected
    """
    if not blocks:
        return Objectives()

    if len(blocks) > 1:
        texts = (strip_html(block.content).strip() for block in blocks)
        return _parse_lines([text for text in texts if text])

    if has_objective_cues:
        return _parse_lines(html_to_lines(blocks[0].content))

    return Objectives(objectives=extract_list_items(blocks[0].content))
