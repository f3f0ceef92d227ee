"""
Tests for list-marker analysis, heading heuristics and the rule evaluator.
"""

import pytest

from content_designer.heuristics import (
    analyze_list_marker, is_block_heading, is_heading_like_text, marker_length, should_be_heading
)
from content_designer.models import ContentBlock
from content_designer.rules import Rule, first_match, first_matching_rule


@pytest.mark.parametrize("text, list_type, clean_text", [
    ('• First item', 'bulletList', 'First item'),
    ('- This is a short note', 'bulletList', 'This is a short note'),
    ('* Starred point', 'bulletList', 'Starred point'),
    ('2. Preheat the oven', 'numericList', 'Preheat the oven'),
    ('(3) Third step', 'numericList', 'Third step'),
    ('a) Apples are red', 'alphaList', 'Apples are red'),
    ('iv. Fourth point', 'numericList', 'Fourth point'),
])
def test_list_markers_detected(text, list_type, clean_text):
    marker = analyze_list_marker(text)

    assert marker.is_list
    assert marker.list_type == list_type
    assert marker.clean_text == clean_text


@pytest.mark.parametrize("text", [
    '- and then continued mid-sentence',
    '2.5 kg of flour',
    'a. m.',
    'Plain sentence with no marker.',
    '',
])
def test_non_list_text(text):
    marker = analyze_list_marker(text)

    assert not marker.is_list
    assert marker.list_type is None


def test_overlong_text_is_never_a_list_item():
    assert not analyze_list_marker('• ' + 'word ' * 120).is_list


def test_ambiguous_bullet_with_many_sentences_is_not_a_list():
    assert not analyze_list_marker('- One. Two. Three. Four.').is_list


def test_marker_length_counts_marker_and_spacing():
    assert marker_length('2. Preheat') == 3
    assert marker_length('•   Spaced') == 4
    assert marker_length('No marker') == 0


def test_heading_like_text():
    assert is_heading_like_text('Introduction')
    assert is_heading_like_text('Key Ideas')
    assert not is_heading_like_text('Ends with a period.')
    assert not is_heading_like_text('A' * 101)
    assert not is_heading_like_text('')


def test_should_be_heading_rejects_long_or_multi_sentence_text():
    assert not should_be_heading('A' * 101)
    assert not should_be_heading('This has two. Sentences here.')
    assert not should_be_heading('')


def test_should_be_heading_accepts_patterns():
    assert should_be_heading('Chapter 3 Materials')
    assert should_be_heading('what happens next')
    assert should_be_heading('Overview of the course')


def test_should_be_heading_rejects_sentence_ending_in_period():
    assert not should_be_heading('The oven should be hot.')


def test_should_be_heading_needs_a_noun_for_unpatterned_text(fixed_tags):
    assert not should_be_heading('3D printing basics')

    fixed_tags['basics'] = 'NNS'

    assert should_be_heading('3D printing basics')


def test_should_be_heading_uses_nouns_for_unpatterned_text(tagger):
    assert should_be_heading('3D printing basics')


def test_block_heading_variants():
    assert is_block_heading(ContentBlock(id='1', type='heading', content='<h2>Anything at all.</h2>'))
    assert is_block_heading(ContentBlock(id='2', content='<p>Key Ideas</p>'))
    assert not is_block_heading(ContentBlock(id='3', content='<p>Plain sentence here.</p>'))


def test_rules_first_match_wins_in_order():
    rules = (
        Rule('short', lambda n: n < 10, 'small'),
        Rule('even', lambda n: n % 2 == 0, lambda n: f'even {n}'),
    )

    assert first_match(rules, 4) == 'small'
    assert first_match(rules, 12) == 'even 12'
    assert first_match(rules, 13) is None
    assert first_matching_rule(rules, 12).name == 'even'
