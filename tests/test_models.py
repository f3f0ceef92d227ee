"""
Tests for content blocks, the split-point store and the component catalogue.
"""

from content_designer.models import (
    COMPONENT_REGISTRY, ComponentRunKey, ContentBlock, CustomisationKey, IconCustomisation,
    IndentKey, SplitPointStore, is_multi_block_component
)


def test_block_round_trips_camel_case_data():
    data = {'id': 'b1', 'type': 'list', 'content': '<p>x</p>', 'listType': 'alphaList',
            'component': 'alphaList'}

    assert ContentBlock.from_data(data).to_data() == data


def test_block_without_id_gets_one():
    assert ContentBlock.from_data({'content': '<p>x</p>'}).id


def test_key_types_are_distinct():
    run = ComponentRunKey('bulletList', ('a',))
    indent = IndentKey('bulletList', ('a',))
    store = SplitPointStore().set(run, [1]).set(indent, {'a': 1})

    assert len(store) == 2
    assert store.get(run) == [1]
    assert store.get(indent) == {'a': 1}


def test_store_external_form():
    store = (SplitPointStore()
             .set(ComponentRunKey('tabs', ('a', 'b')), [1])
             .set(IndentKey('bulletList', ('c',)), {'c': 2})
             .set(CustomisationKey('iconList', ('d',)), IconCustomisation('star', 'red')))

    assert store.to_dict() == {
        'tabs-a-b': [1],
        'indent-bulletList-c': {'c': 2},
        'customisation-iconList-d': {'icon': 'star', 'colour': 'red'},
    }


def test_store_is_immutable_on_set():
    store = SplitPointStore()

    store.set(ComponentRunKey('tabs', ('a',)), [])

    assert len(store) == 0


def test_store_lookups_default_sensibly():
    store = SplitPointStore()

    assert store.split_points('tabs', ['a']) is None
    assert store.indent_levels('bulletList', ['a']) == {}
    assert store.customisation('iconList', ['a']) == IconCustomisation()


def test_prune_and_without_block():
    store = (SplitPointStore()
             .set(ComponentRunKey('tabs', ('a', 'b')), [1])
             .set(ComponentRunKey('tabs', ('c',)), []))

    assert store.prune(['a', 'b']).to_dict() == {'tabs-a-b': [1]}
    assert store.without_block('c').to_dict() == {'tabs-a-b': [1]}


def test_catalogue_flags():
    assert set(COMPONENT_REGISTRY) >= {'moduleTitle', 'heading', 'iconList', 'numberedList', 'tabs'}
    assert not is_multi_block_component('heading')
    assert is_multi_block_component('infoBox')
    assert not is_multi_block_component('unknown')
    assert not is_multi_block_component(None)
    smart = {name for name, spec in COMPONENT_REGISTRY.items() if spec.smart_grouping}
    assert smart == {'accordion', 'carousel', 'tabs', 'stylizedContentBox'}
