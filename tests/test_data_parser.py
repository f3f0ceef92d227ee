"""
Tests for loading render-job documents.
"""

import json

import pytest

from content_designer.data_parser import DocumentParser


def write(tmp_path, content):
    path = tmp_path / 'doc.json'
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding='utf-8')
    return path


def test_parses_document_and_assignments(tmp_path):
    path = write(tmp_path, {
        'html': '<p>Hello.</p>',
        'components': [
            {'component': 'tabs', 'blocks': [0, 1], 'splitPoints': [1]},
            {'component': 'bulletList', 'blocks': [2], 'indentLevels': {'2': 1}},
            {'component': 'iconList', 'blocks': [3], 'customisation': {'icon': 'star', 'color': 'red'}},
        ],
    })

    document = DocumentParser(str(path)).parse()

    assert document.payload.html == '<p>Hello.</p>'
    tabs, bullets, icons = document.components
    assert tabs.split_points == [1]
    assert bullets.indent_levels == {2: 1}
    assert icons.customisation.icon == 'star'
    assert icons.customisation.colour == 'red'


def test_plain_text_only_document(tmp_path):
    document = DocumentParser(str(write(tmp_path, {'plainText': 'Hi there.'}))).parse()

    assert document.payload.plain_text == 'Hi there.'
    assert document.components == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DocumentParser(str(tmp_path / 'missing.json')).parse()


@pytest.mark.parametrize("content", [
    '{not json',
    [1, 2, 3],
    {'components': []},
    {'html': '<p>x</p>', 'components': [{'component': 'infoBox', 'blocks': ['0']}]},
    {'html': '<p>x</p>', 'components': [{'blocks': [0]}]},
    {'html': '<p>x</p>', 'components': [{'component': 'bulletList', 'blocks': [0], 'indentLevels': [1]}]},
    {'html': '<p>x</p>', 'components': 'tabs'},
])
def test_invalid_documents_raise_value_error(tmp_path, content):
    with pytest.raises(ValueError):
        DocumentParser(str(write(tmp_path, content))).parse()


def test_unknown_components_are_kept_and_empty_assignments_skipped(tmp_path):
    path = write(tmp_path, {
        'html': '<p>x</p>',
        'components': [
            {'component': 'sparkles', 'blocks': [0]},
            {'component': 'infoBox', 'blocks': []},
        ],
    })

    document = DocumentParser(str(path)).parse()

    assert [a.component for a in document.components] == ['sparkles']
