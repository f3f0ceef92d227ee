"""
Tests for the command-line entry point.
"""

import json

import pytest

import main


def test_render_command_writes_output(tmp_path, capsys):
    source = tmp_path / 'doc.json'
    source.write_text(json.dumps({'plainText': 'First paragraph here.\n\nSecond paragraph here.'}),
                      encoding='utf-8')
    output = tmp_path / 'doc.html'

    assert main.main(['render', str(source), '-o', str(output)]) == 0

    assert '<article role="article">' in output.read_text(encoding='utf-8')
    assert '2 blocks rendered' in capsys.readouterr().out


def test_render_command_reports_bad_documents(tmp_path, capsys):
    source = tmp_path / 'doc.json'
    source.write_text('{}', encoding='utf-8')

    assert main.main(['render', str(source)]) == 1
    assert 'ERROR' in capsys.readouterr().err


def test_command_is_required():
    with pytest.raises(SystemExit):
        main.parse_args([])


def test_render_command_lists_applied_components(tmp_path, capsys):
    source = tmp_path / 'doc.json'
    source.write_text(json.dumps({
        'html': '<p>Remember to save.</p><p>Save often.</p>',
        'components': [{'component': 'infoBox', 'blocks': [0, 1]}],
    }), encoding='utf-8')

    assert main.main(['render', str(source), '-o', str(tmp_path / 'doc.html')]) == 0

    assert 'Components: infoBox x2' in capsys.readouterr().out
