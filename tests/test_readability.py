"""
Tests for readability statistics.
"""

from content_designer.models import ContentBlock
from content_designer.readability import (
    ReadabilityAnalyzer, ReadabilityStats, consensus_reading_level, count_syllables,
    flesch_kincaid_grade, flesch_reading_ease
)

SIMPLE = 'The cat sat. The dog ran. The sun is hot.'
COMPLEX = ('Organisational bureaucracies complicate implementation. '
           'Institutional regulations necessitate documentation. '
           'Considerable deliberation accompanies modification.')


def test_empty_text_gives_neutral_stats():
    stats = ReadabilityAnalyzer().analyze_text('')

    assert stats == ReadabilityStats()
    assert stats.reading_level == 'Medium'
    assert stats.word_count == 0


def test_empty_blocks_give_neutral_stats():
    blocks = [ContentBlock(id='a', content='<p> </p>')]

    assert ReadabilityAnalyzer().analyze(blocks).word_count == 0


def test_count_syllables():
    assert count_syllables('cat') == 1
    assert count_syllables('table') == 2
    assert count_syllables('happy') == 2
    assert count_syllables('123') == 0


def test_reading_time_rounds_up():
    analyzer = ReadabilityAnalyzer(words_per_minute=225)

    stats = analyzer.analyze_text('word ' * 450 + 'extra')

    assert stats.word_count == 451
    assert stats.reading_time == 3


def test_reading_speed_from_environment(monkeypatch):
    monkeypatch.setenv('CONTENT_DESIGNER_WPM', '100')

    assert ReadabilityAnalyzer().words_per_minute == 100


def test_complex_text_scores_harder():
    analyzer = ReadabilityAnalyzer()

    simple = analyzer.analyze_text(SIMPLE)
    hard = analyzer.analyze_text(COMPLEX)

    assert hard.gunning_fog > simple.gunning_fog
    assert hard.smog > simple.smog
    assert hard.complex_words > simple.complex_words
    assert hard.flesch_reading < simple.flesch_reading


def test_more_syllables_never_read_easier_at_fixed_counts():
    for syllables in range(12, 48):
        assert flesch_reading_ease(12, 3, syllables + 1) <= flesch_reading_ease(12, 3, syllables)
        assert flesch_kincaid_grade(12, 3, syllables + 1) >= flesch_kincaid_grade(12, 3, syllables)


def test_longer_word_in_same_sentences_scores_harder():
    analyzer = ReadabilityAnalyzer()

    short = analyzer.analyze_text(COMPLEX)
    longer = analyzer.analyze_text(COMPLEX.replace('Considerable', 'Inconsiderable'))

    assert longer.word_count == short.word_count
    assert longer.syllables_per_word > short.syllables_per_word
    assert longer.flesch_reading <= short.flesch_reading
    assert longer.flesch_kincaid > short.flesch_kincaid


def test_smog_needs_three_sentences():
    stats = ReadabilityAnalyzer().analyze_text('Considerable deliberation. Institutional regulations.')

    assert stats.smog == 0


def test_reading_ease_is_clamped():
    stats = ReadabilityAnalyzer().analyze_text(COMPLEX)

    assert 0 <= stats.flesch_reading <= 100


def test_consensus_reading_level_bands_and_overrides():
    assert consensus_reading_level(3, 50) == 'Elementary'
    assert consensus_reading_level(9, 85) == 'Middle School'
    assert consensus_reading_level(11, 20) == 'Graduate'
    assert consensus_reading_level(13, 50) == 'University'
    assert consensus_reading_level(20, 50) == 'Professional'


def test_stats_serialise_to_camel_case():
    data = ReadabilityAnalyzer().analyze_text(SIMPLE).to_data()

    assert data['wordCount'] == 10
    assert {'readingTime', 'readingLevel', 'fleschKincaid', 'avgGradeLevel',
            'syllablesPerWord', 'automatedReadability'} <= set(data)
