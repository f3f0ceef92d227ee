"""
Tests for partitioning block runs into tabs, slides, sections and cards.
"""

from content_designer.grouper import (
    auto_detect_split_points, group_by_headings, group_by_manual_splits, group_for_accordion,
    group_for_carousel, group_for_stylised_box, group_for_tabs
)
from content_designer.models import ContentBlock


def ids(group):
    return [b.id for b in group.content]


def test_manual_split_gives_two_tabs(paragraph_blocks):
    groups = group_for_tabs(paragraph_blocks, [2])

    assert [g.title for g in groups] == ['Tab 1', 'Tab 2']
    assert [ids(g) for g in groups] == [['a', 'b'], ['c', 'd']]


def test_out_of_range_split_points_give_one_group(paragraph_blocks):
    for split_points in ([0], [4]):
        groups = group_for_tabs(paragraph_blocks, split_points)

        assert len(groups) == 1
        assert groups[0].title == 'Tab 1'
        assert ids(groups[0]) == ['a', 'b', 'c', 'd']


def test_unsorted_duplicate_split_points(paragraph_blocks):
    groups = group_by_manual_splits(paragraph_blocks, [3, 1, 3])

    assert [ids(g) for g in groups] == [['a'], ['b', 'c'], ['d']]


def test_manual_group_takes_heading_as_title(sectioned_blocks):
    groups = group_by_manual_splits(sectioned_blocks, [2])

    assert [g.title for g in groups] == ['<h2>Overview</h2>', '<h2>Details</h2>']
    assert [ids(g) for g in groups] == [['p1'], ['p2']]


def test_tabs_from_headings_use_plain_titles(sectioned_blocks):
    groups = group_for_tabs(sectioned_blocks)

    assert [g.title for g in groups] == ['Overview', 'Details']


def test_long_tab_titles_are_truncated():
    blocks = [ContentBlock(id='h', type='heading',
                           content='<h2>An unusually long heading for a single tab</h2>'),
              ContentBlock(id='p', content='<p>Body text.</p>')]

    title = group_for_tabs(blocks)[0].title

    assert title.endswith('...')
    assert len(title) <= 33


def test_leading_blocks_form_untitled_group():
    blocks = [ContentBlock(id='p0', content='<p>Preamble text.</p>'),
              ContentBlock(id='h', type='heading', content='<h2>Topic</h2>'),
              ContentBlock(id='p1', content='<p>Topic text.</p>')]

    groups = group_by_headings(blocks)

    assert [(g.title, ids(g)) for g in groups] == [('', ['p0']), ('<h2>Topic</h2>', ['p1'])]


def test_consecutive_headings_keep_empty_groups():
    blocks = [ContentBlock(id='h1', type='heading', content='<h2>One</h2>'),
              ContentBlock(id='h2', type='heading', content='<h2>Two</h2>'),
              ContentBlock(id='p', content='<p>Body text.</p>')]

    groups = group_by_headings(blocks)

    assert [ids(g) for g in groups] == [[], ['p']]


def test_accordion_distinguishes_missing_and_empty_split_points(sectioned_blocks):
    auto = group_for_accordion(sectioned_blocks, None)
    single = group_for_accordion(sectioned_blocks, [])

    assert len(auto) == 2
    assert len(single) == 1
    assert ids(single[0]) == ['p1', 'h2', 'p2']


def test_carousel_treats_empty_split_points_as_auto(sectioned_blocks):
    assert len(group_for_carousel(sectioned_blocks, [])) == 2


def test_carousel_fallback_titles(paragraph_blocks):
    groups = group_for_carousel(paragraph_blocks, [1, 2, 3])

    assert [g.title for g in groups] == ['Slide 1', 'Slide 2', 'Slide 3', 'Slide 4']


def test_accordion_fallback_titles(paragraph_blocks):
    assert [g.title for g in group_for_accordion(paragraph_blocks, [2])] == ['Section 1', 'Section 2']


def test_stylised_box_balances_columns_without_headings(paragraph_blocks):
    assert [ids(g) for g in group_for_stylised_box(paragraph_blocks)] == [['a', 'b'], ['c', 'd']]

    five = paragraph_blocks + [ContentBlock(id='e', content='<p>Echo ends it.</p>')]
    assert [len(g.content) for g in group_for_stylised_box(five)] == [2, 2, 1]


def test_stylised_box_groups_by_headings_when_present(sectioned_blocks):
    assert len(group_for_stylised_box(sectioned_blocks)) == 2


def test_auto_detect_split_points(sectioned_blocks, paragraph_blocks):
    assert auto_detect_split_points(sectioned_blocks) == [2]
    assert auto_detect_split_points(paragraph_blocks) == [1, 2, 3]


def test_auto_detect_counts_heading_markup_in_paragraphs(paragraph_blocks):
    blocks = paragraph_blocks[:2] + [ContentBlock(id='x', content='<h3>Inline heading</h3>')]

    assert auto_detect_split_points(blocks) == [2]
