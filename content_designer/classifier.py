"""
This module contains the ContentClassifier class, which suggests a design
component for each content block.
"""
import logging
import re
from typing import Dict, List, Optional

from .heuristics import should_be_heading
from .html_utils import strip_html
from .models import ContentBlock
from .nlp import verbs
from .rules import Rule, any_pattern, first_match

logger = logging.getLogger(__name__)

MODULE_TITLE_RE = re.compile(r'^(module|chapter|unit|section|lesson)\s+\d+', re.IGNORECASE)


def _patterns(*sources: str):
    return tuple(re.compile(source, re.IGNORECASE) for source in sources)


LEARNING_OBJECTIVE_PATTERNS = _patterns(
    r'learning objectives?', r'by the end of', r'you will be able to', r'students will',
    r'learners will', r'objectives?:', r'goals?:', r'outcomes?:'
)
SUMMARY_PATTERNS = _patterns(
    r'summary', r'in summary', r'to summarise', r'to summarize', r'key points',
    r'key takeaways', r'main points', r'recap', r'conclusion', r'in conclusion'
)
EXERCISE_PATTERNS = _patterns(
    r'exercise', r'question', r'activity', r'practice', r'try it', r'your turn',
    r'task', r'assignment', r'homework', r'\?$'
)
RESOURCE_PATTERNS = _patterns(
    r'resource', r'additional reading', r'further reading', r'reference', r'link',
    r'website', r'url', r'download', r'materials', r'documentation', r'guide',
    r'manual', r'http', r'www\.', r'\.com', r'\.org', r'\.edu'
)
IMPORTANT_NOTE_PATTERNS = _patterns(
    r'important', r'note:', r'remember', r"don't forget", r'keep in mind', r'attention',
    r'warning', r'caution', r'tip:', r'pro tip', r'hint:'
)
STEP_PATTERNS = _patterns(
    r'step \d+', r'first', r'second', r'third', r'next', r'then', r'finally',
    r'procedure', r'process'
)

ACTION_VERBS = frozenset((
    'complete', 'finish', 'submit', 'review', 'read', 'write',
    'create', 'design', 'implement', 'analyze', 'evaluate',
    'understand', 'learn', 'master', 'practice', 'apply'
))


def _text_matches(patterns):
    matcher = any_pattern(patterns)
    return lambda text, block: matcher(text)


def _looks_like_heading(text: str, block: ContentBlock) -> bool:
    if block.type == 'heading':
        return True
    if block.type != 'paragraph' or block.list_type or '.' in text:
        return False
    return should_be_heading(text)


def _heading_component(text: str, block: ContentBlock) -> str:
    return 'moduleTitle' if MODULE_TITLE_RE.match(text) else 'heading'


def _has_action_verb(text: str) -> bool:
    return any(verb in ACTION_VERBS for verb in verbs(text))


def _list_component(text: str, block: ContentBlock) -> str:
    if _has_action_verb(text):
        return 'iconList'
    if any_pattern(STEP_PATTERNS)(text):
        return 'numberedList'
    return 'bulletList'


SUGGESTION_RULES = (
    Rule('heading', _looks_like_heading, _heading_component),
    Rule('learning-objectives', _text_matches(LEARNING_OBJECTIVE_PATTERNS), 'learningObjectives'),
    Rule('summary', _text_matches(SUMMARY_PATTERNS), 'summaryBox'),
    Rule('exercise', _text_matches(EXERCISE_PATTERNS), 'exerciseBox'),
    Rule('resource', _text_matches(RESOURCE_PATTERNS), 'resourceBox'),
    Rule('important-note', _text_matches(IMPORTANT_NOTE_PATTERNS), 'infoBox'),
    Rule('list', lambda text, block: block.type == 'list', _list_component),
)


class ContentClassifier:
    """Suggests design components for content blocks"""

    def __init__(self, rules=SUGGESTION_RULES):
        self.rules = tuple(rules)

    def suggest(self, block: ContentBlock) -> Optional[str]:
        """Suggested component for one block, or None"""
        text = strip_html(block.content).strip()
        return first_match(self.rules, text, block)

    def classify(self, blocks: List[ContentBlock]) -> Dict[str, str]:
        """
        Map block ids to suggested components

        Args:
            blocks: Current block sequence

        Returns:
            Suggestion map; blocks without a suggestion are absent
        """
        suggestions = {}
        for block in blocks:
            suggestion = self.suggest(block)
            if suggestion:
                suggestions[block.id] = suggestion
        logger.debug("Suggested components for %d of %d blocks", len(suggestions), len(blocks))
        return suggestions


def classify_content(blocks: List[ContentBlock]) -> Dict[str, str]:
    """Suggestion map for blocks using the default rule set"""
    return ContentClassifier().classify(blocks)
