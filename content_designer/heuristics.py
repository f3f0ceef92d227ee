"""
Heuristics for recognising list markers and headings in plain text.

Marker detection is an ordered rule list: unambiguous bullets, ambiguous
dash/asterisk, numeric, alphabetic, roman. The first rule whose marker pattern
matches decides, even when it decides the text is not a list item.
"""
import re
from dataclasses import dataclass
from typing import Optional

from .html_utils import strip_html
from .models import ContentBlock
from .nlp import has_nouns
from .rules import Rule, any_pattern, first_match

MAX_LIST_ITEM_LENGTH = 500
MAX_AMBIGUOUS_ITEM_LENGTH = 300
MAX_HEADING_LENGTH = 100

UNAMBIGUOUS_BULLET_RE = re.compile(
    r'^[•·○●◦‣⁃▪▫■□✓✔➢➣➤➔→⇒•‣⁃⁌⁍∙○●◦]\s+'
)
AMBIGUOUS_BULLET_RE = re.compile(r'^(?:[-−–—]|\*)\s+')
NUMERIC_RES = (re.compile(r'^\d+[.)]\s+'), re.compile(r'^\(\d+\)\s+'))
ALPHA_RES = (re.compile(r'^[a-z][.)]\s+', re.IGNORECASE),
             re.compile(r'^\([a-z]\)\s+', re.IGNORECASE))
ROMAN_RE = re.compile(r'^(?:i{1,3}|iv|v|vi{0,3}|ix|x|xi{0,3})[.)]\s+', re.IGNORECASE)

SENTENCE_PUNCTUATION_RE = re.compile(r'[.!?]')
ENDS_WITH_PUNCTUATION_RE = re.compile(r'[.!?]$')
STARTS_WITH_CAPITAL_RE = re.compile(r'^[A-Z]')

HEADING_PATTERNS = (
    re.compile(r'^(introduction|overview|summary|conclusion|background|objectives?|goals?)',
               re.IGNORECASE),
    re.compile(r'^(part|chapter|section|module|unit|lesson|topic|week)\s+', re.IGNORECASE),
    re.compile(r'^\d+[.)]\s+'),
    re.compile(r'^[A-Z][^.!?]*$'),
    re.compile(r'^(what|why|how|when|where|who)\s+', re.IGNORECASE),
)
matches_heading_pattern = any_pattern(HEADING_PATTERNS)


@dataclass(frozen=True)
class ListMarker:
    """Outcome of list-marker analysis for one line of text"""
    is_list: bool
    list_type: Optional[str]
    clean_text: str


def _not_a_list(text: str) -> ListMarker:
    return ListMarker(False, None, text)


def _strip_marker(pattern, text: str) -> str:
    return pattern.sub('', text, count=1).strip()


def _first_pattern(patterns, text: str):
    for pattern in patterns:
        if pattern.match(text):
            return pattern
    return None


def _ambiguous_bullet(text: str) -> ListMarker:
    remainder = _strip_marker(AMBIGUOUS_BULLET_RE, text)
    sentence_marks = len(SENTENCE_PUNCTUATION_RE.findall(remainder))
    if (len(remainder) < MAX_AMBIGUOUS_ITEM_LENGTH and sentence_marks <= 2
            and STARTS_WITH_CAPITAL_RE.match(remainder)):
        return ListMarker(True, 'bulletList', remainder)
    return _not_a_list(text)


def _alpha_item(text: str) -> ListMarker:
    remainder = _strip_marker(_first_pattern(ALPHA_RES, text), text)
    # rejects abbreviation runs like "a. m."
    if STARTS_WITH_CAPITAL_RE.match(remainder) or len(remainder) > 20:
        return ListMarker(True, 'alphaList', remainder)
    return _not_a_list(text)


MARKER_RULES = (
    Rule('unambiguous-bullet',
         lambda text: UNAMBIGUOUS_BULLET_RE.match(text),
         lambda text: ListMarker(True, 'bulletList', _strip_marker(UNAMBIGUOUS_BULLET_RE, text))),
    Rule('ambiguous-bullet',
         lambda text: AMBIGUOUS_BULLET_RE.match(text),
         _ambiguous_bullet),
    Rule('numeric',
         lambda text: _first_pattern(NUMERIC_RES, text),
         lambda text: ListMarker(True, 'numericList',
                                 _strip_marker(_first_pattern(NUMERIC_RES, text), text))),
    Rule('alpha',
         lambda text: _first_pattern(ALPHA_RES, text),
         _alpha_item),
    Rule('roman',
         lambda text: ROMAN_RE.match(text),
         lambda text: ListMarker(True, 'numericList', _strip_marker(ROMAN_RE, text))),
)


def analyze_list_marker(text: Optional[str]) -> ListMarker:
    """Detect whether a line of text is a list item and which kind"""
    if not text or not isinstance(text, str):
        return _not_a_list(text or '')

    trimmed = text.strip()
    if len(trimmed) > MAX_LIST_ITEM_LENGTH:
        return _not_a_list(trimmed)

    return first_match(MARKER_RULES, trimmed) or _not_a_list(trimmed)


def marker_length(text: str) -> int:
    """Number of leading characters of the stripped text taken by its list marker"""
    trimmed = text.strip()
    analysis = analyze_list_marker(trimmed)
    if not analysis.is_list:
        return 0
    return len(trimmed) - len(analysis.clean_text)


def is_heading_like_text(text: Optional[str]) -> bool:
    """Lexical heading check: short, unpunctuated and matching a heading pattern"""
    if not text or len(text) > MAX_HEADING_LENGTH:
        return False
    if ENDS_WITH_PUNCTUATION_RE.search(text):
        return False
    return matches_heading_pattern(text)


def should_be_heading(text: Optional[str]) -> bool:
    """Check if a paragraph's text should be treated as a heading"""
    if not text:
        return False
    if len(text) > MAX_HEADING_LENGTH or len(SENTENCE_PUNCTUATION_RE.findall(text)) > 1:
        return False

    if matches_heading_pattern(text):
        return True

    is_capitalised = text[0] == text[0].upper()
    word_count = len(text.split(' '))
    return (is_capitalised and word_count < 8
            and not ENDS_WITH_PUNCTUATION_RE.search(text)
            and has_nouns(text))


def is_block_heading(block: ContentBlock) -> bool:
    """Check if a block should open a new group"""
    if block.type == 'heading':
        return True
    return is_heading_like_text(strip_html(block.content or '').strip())
