"""
This module contains the ReadabilityAnalyzer class, which computes reading
time and grade-level statistics over the plain text of a block sequence.
"""
import logging
import math
import os
import re
from dataclasses import asdict, dataclass
from typing import Dict, Any, List, Optional, Tuple

from .html_utils import strip_html
from .models import ContentBlock
from .nlp import split_sentences

logger = logging.getLogger(__name__)

DEFAULT_WORDS_PER_MINUTE = 225

_ADD_SYLLABLE_PATTERNS = tuple(re.compile(p) for p in (
    r'ia', r'eo', r'oa', r'ua', r'uo', r'tion', r'sion', r'ious', r'eous', r'ied'
))
_SUBTRACT_SYLLABLE_PATTERNS = tuple(re.compile(p) for p in (
    r'dge$', r'ked$', r'[^l]led$', r'[^r]red$', r'shed$', r'ted$'
))
_SIMPLE_ENDING_RE = re.compile(r'(ing|ed|es|ly)$')

GRADE_BANDS = (
    (5, 'Elementary'),
    (8, 'Middle School'),
    (10, 'Year 9-10'),
    (12, 'Year 11-12'),
    (14, 'University'),
    (16, 'Graduate'),
)


@dataclass
class ReadabilityStats:
    """Reading time and readability scores for a text"""
    word_count: int = 0
    reading_time: int = 0
    reading_level: str = 'Medium'
    flesch_kincaid: float = 0
    flesch_reading: float = 0
    gunning_fog: float = 0
    smog: float = 0
    coleman_liau: float = 0
    automated_readability: float = 0
    avg_grade_level: float = 0
    avg_sentence_length: float = 0
    avg_word_length: float = 0
    complex_words: int = 0
    syllables_per_word: float = 0

    def to_data(self) -> Dict[str, Any]:
        """Serialise stats to a camelCase mapping"""
        data = asdict(self)
        return {_camel_case(key): value for key, value in data.items()}


def _camel_case(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


def _round(value: float, places: int = 1) -> float:
    """Round half up to the given number of decimal places"""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def count_syllables(word: str) -> int:
    """Estimated syllable count of a single word, at least 1 for any letters"""
    word = re.sub(r'[^a-z]', '', word.lower())
    if not word:
        return 0

    syllables = 0
    previous_was_vowel = False
    for char in word:
        is_vowel = char in 'aeiou'
        if is_vowel and not previous_was_vowel:
            syllables += 1
        previous_was_vowel = is_vowel

    syllables += sum(1 for pattern in _ADD_SYLLABLE_PATTERNS if pattern.search(word))
    syllables -= sum(1 for pattern in _SUBTRACT_SYLLABLE_PATTERNS if pattern.search(word))

    if (word.endswith('e') and not word.endswith('le') and syllables > 1
            and not re.search(r'[aeiou]e$', word) and not re.search(r'[lr]e$', word)):
        syllables -= 1

    if len(word) > 1 and word.endswith('y') and not re.search(r'[aeiou]y$', word):
        syllables += 1

    return max(1, syllables)


def count_syllables_in(words: List[str]) -> Tuple[int, int]:
    """Total syllables and complex-word count of a word list"""
    total = 0
    complex_words = 0
    for word in words:
        syllables = count_syllables(word)
        if not syllables:
            continue
        if syllables >= 3:
            letters = re.sub(r'[^a-z]', '', word.lower())
            simple_ending = bool(_SIMPLE_ENDING_RE.search(letters)) and syllables == 3
            if not simple_ending:
                complex_words += 1
        total += syllables
    return total, complex_words


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    if words == 0 or sentences == 0:
        return 100
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return max(0, min(100, score))


def flesch_kincaid_grade(words: int, sentences: int, syllables: int) -> float:
    if words == 0 or sentences == 0:
        return 0
    return max(0, 0.39 * (words / sentences) + 11.8 * (syllables / words) - 15.59)


def gunning_fog(words: int, sentences: int, complex_words: int) -> float:
    if words == 0 or sentences == 0:
        return 0
    return max(0, 0.4 * ((words / sentences) + 100 * (complex_words / words)))


def smog_index(sentences: int, complex_words: int) -> float:
    if sentences < 3:
        return 0
    return max(0, 1.0430 * math.sqrt(complex_words * (30 / sentences)) + 3.1291)


def coleman_liau(letters: int, words: int, sentences: int) -> float:
    if words == 0:
        return 0
    letters_per_100 = (letters / words) * 100
    sentences_per_100 = (sentences / words) * 100
    return max(0, 0.0588 * letters_per_100 - 0.296 * sentences_per_100 - 15.8)


def automated_readability(chars: int, words: int, sentences: int) -> float:
    if words == 0 or sentences == 0:
        return 0
    return max(0, 4.71 * (chars / words) + 0.5 * (words / sentences) - 21.43)


def consensus_reading_level(avg_grade: float, reading_ease: float) -> str:
    """Reading level band for an averaged grade, with reading-ease overrides"""
    if reading_ease > 80 and avg_grade > 8:
        return 'Middle School'
    if reading_ease < 30 and avg_grade < 12:
        return 'Graduate'

    for upper_bound, level in GRADE_BANDS:
        if avg_grade < upper_bound:
            return level
    return 'Professional'


class ReadabilityAnalyzer:
    """Computes readability statistics for block sequences"""

    def __init__(self, words_per_minute: Optional[int] = None):
        self.words_per_minute = words_per_minute or int(
            os.getenv('CONTENT_DESIGNER_WPM', str(DEFAULT_WORDS_PER_MINUTE)))

    @staticmethod
    def plain_text(blocks: List[ContentBlock]) -> str:
        """Space-joined plain text of all blocks"""
        return ' '.join(strip_html(block.content) for block in blocks).strip()

    def analyze(self, blocks: List[ContentBlock]) -> ReadabilityStats:
        """Statistics over the plain text of blocks"""
        return self.analyze_text(self.plain_text(blocks))

    def analyze_text(self, text: str) -> ReadabilityStats:
        """
        Statistics for a plain text

        Args:
            text: Text to analyse

        Returns:
            ReadabilityStats; all zero with level 'Medium' for empty text
        """
        words = text.split() if text else []
        if not words:
            return ReadabilityStats()

        word_count = len(words)
        sentence_count = max(len(split_sentences(text)), 1)

        char_count = len(re.sub(r'\s', '', text))
        letter_count = len(re.sub(r'[^a-zA-Z]', '', text))
        avg_word_length = letter_count / word_count
        avg_sentence_length = word_count / sentence_count

        syllable_count, complex_count = count_syllables_in(words)
        syllables_per_word = syllable_count / word_count

        reading_ease = flesch_reading_ease(word_count, sentence_count, syllable_count)
        scores = {
            'flesch_kincaid': flesch_kincaid_grade(word_count, sentence_count, syllable_count),
            'gunning_fog': gunning_fog(word_count, sentence_count, complex_count),
            'smog': smog_index(sentence_count, complex_count),
            'coleman_liau': coleman_liau(letter_count, word_count, sentence_count),
            'automated_readability': automated_readability(char_count, word_count, sentence_count),
        }

        valid_scores = [score for score in scores.values() if score > 0]
        avg_grade = sum(valid_scores) / len(valid_scores) if valid_scores else 0

        logger.debug("Analysed %d words in %d sentences", word_count, sentence_count)

        return ReadabilityStats(
            word_count=word_count,
            reading_time=math.ceil(word_count / self.words_per_minute),
            reading_level=consensus_reading_level(avg_grade, reading_ease),
            flesch_reading=_round(reading_ease),
            avg_grade_level=_round(avg_grade),
            avg_sentence_length=_round(avg_sentence_length),
            avg_word_length=_round(avg_word_length),
            complex_words=complex_count,
            syllables_per_word=_round(syllables_per_word, 2),
            **{name: _round(score) for name, score in scores.items()}
        )
