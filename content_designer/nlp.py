"""
Lightweight part-of-speech helpers backed by NLTK.

Only the perceptron tagger needs downloadable data. Tokenising uses NLTK's
regular-expression tokenizer and sentence splitting uses an untrained Punkt
tokenizer, neither of which needs data files.
"""
import logging
import os
from functools import lru_cache
from typing import List, Tuple

import nltk
from nltk.tokenize import wordpunct_tokenize
from nltk.tokenize.punkt import PunktSentenceTokenizer

logger = logging.getLogger(__name__)

TAGGER_RESOURCE = 'averaged_perceptron_tagger_eng'

_tagger_available = None
_sentence_tokenizer = PunktSentenceTokenizer()


def ensure_tagger() -> bool:
    """Make sure the perceptron tagger data is loadable, downloading once if allowed"""
    global _tagger_available  # pylint: disable=global-statement
    if _tagger_available is not None:
        return _tagger_available

    try:
        nltk.data.find(f'taggers/{TAGGER_RESOURCE}/')
        _tagger_available = True
    except LookupError:
        if os.getenv('CONTENT_DESIGNER_NLTK_DOWNLOAD', '1') != '0':
            logger.info("Downloading NLTK resource %s", TAGGER_RESOURCE)
            nltk.download(TAGGER_RESOURCE, quiet=True)
        try:
            nltk.data.find(f'taggers/{TAGGER_RESOURCE}/')
            _tagger_available = True
        except LookupError:
            logger.warning("NLTK tagger %s unavailable; part-of-speech checks disabled",
                           TAGGER_RESOURCE)
            _tagger_available = False

    return _tagger_available


@lru_cache(maxsize=2048)
def tag_text(text: str) -> Tuple[Tuple[str, str], ...]:
    """Part-of-speech tags for the words of text"""
    tokens = [token for token in wordpunct_tokenize(text) if any(c.isalnum() for c in token)]
    if not tokens or not ensure_tagger():
        return ()
    return tuple(nltk.pos_tag(tokens, lang='eng'))


def has_nouns(text: str) -> bool:
    """Whether text contains at least one noun-like token"""
    return any(tag.startswith('NN') for _, tag in tag_text(text))


def verbs(text: str) -> List[str]:
    """Lower-cased verbs detected in text"""
    return [word.lower() for word, tag in tag_text(text) if tag.startswith('VB')]


def split_sentences(text: str) -> List[str]:
    """Split text into sentences"""
    if not text or not text.strip():
        return []
    return [sentence for sentence in _sentence_tokenizer.tokenize(text) if sentence.strip()]
