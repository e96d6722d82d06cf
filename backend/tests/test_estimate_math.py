import pytest

from services.estimate_math import (
    parse_amount, blank_line_item, normalize_line_items, estimate_total,
    can_remove_item, update_line_item, remove_line_item, apply_line_item_action
)


def test_parse_amount_treats_garbage_as_zero():
    assert parse_amount('12.5') == 12.5
    assert parse_amount(' 3 ') == 3.0
    assert parse_amount('abc') == 0.0
    assert parse_amount('') == 0.0
    assert parse_amount(None) == 0.0
    assert parse_amount(True) == 0.0
    assert parse_amount('nan') == 0.0
    assert parse_amount(float('inf')) == 0.0


def test_estimate_total_sums_quantity_times_rate():
    items = [
        {'label': 'Walls', 'quantity': 2, 'rate': 50},
        {'label': 'Trim', 'quantity': 1, 'rate': 10},
    ]
    assert estimate_total(items) == pytest.approx(110.0)


def test_estimate_total_ignores_unparseable_quantity():
    items = [
        {'label': 'Walls', 'quantity': 'two', 'rate': 50},
        {'label': 'Trim', 'quantity': 1, 'rate': 10},
    ]
    assert estimate_total(items) == pytest.approx(10.0)


def test_normalize_line_items_adds_amounts():
    items = normalize_line_items([{'label': ' Ceiling ', 'quantity': '3', 'rate': '20.5'}])
    assert items == [{'label': 'Ceiling', 'quantity': 3.0, 'rate': 20.5, 'amount': 61.5}]


def test_normalize_line_items_rejects_non_list():
    with pytest.raises(ValueError):
        normalize_line_items({'label': 'Walls'})
    with pytest.raises(ValueError):
        normalize_line_items(['Walls'])


def test_last_item_cannot_be_removed():
    items = [blank_line_item()]
    assert not can_remove_item(items)
    with pytest.raises(ValueError):
        remove_line_item(items, 0)


def test_remove_line_item_keeps_the_rest():
    items = [
        {'label': 'A', 'quantity': 1, 'rate': 1},
        {'label': 'B', 'quantity': 1, 'rate': 2},
    ]
    remaining = remove_line_item(items, 0)
    assert [item['label'] for item in remaining] == ['B']
    assert len(items) == 2


def test_update_line_item_parses_numbers_but_not_labels():
    items = [blank_line_item()]
    items = update_line_item(items, 0, 'rate', '45')
    items = update_line_item(items, 0, 'label', 'Doors')
    assert items[0]['rate'] == 45.0
    assert items[0]['label'] == 'Doors'
    assert estimate_total(items) == pytest.approx(45.0)


def test_paint_and_primer_estimate():
    items = normalize_line_items([
        {'label': 'Paint', 'quantity': 2, 'rate': 45.00},
        {'label': 'Primer', 'quantity': 1, 'rate': 20.00},
    ])
    assert [item['amount'] for item in items] == [90.0, 20.0]
    assert estimate_total(items) == pytest.approx(110.00)


def test_overflowing_amounts_are_rejected():
    with pytest.raises(ValueError):
        normalize_line_items([{'label': 'Huge', 'quantity': 1e308, 'rate': 10}])
    # each line is finite but the sum is not
    with pytest.raises(ValueError):
        estimate_total([
            {'label': 'A', 'quantity': 1e308, 'rate': 1},
            {'label': 'B', 'quantity': 1e308, 'rate': 1},
        ])


def test_negative_quantity_or_rate_is_rejected():
    with pytest.raises(ValueError, match='quantity cannot be negative'):
        normalize_line_items([{'label': 'Walls', 'quantity': -3, 'rate': 50}])
    with pytest.raises(ValueError, match='rate cannot be negative'):
        normalize_line_items([{'label': 'Walls', 'quantity': 3, 'rate': '-50'}])


def test_apply_line_item_action():
    items = [{'label': 'Walls', 'quantity': 2, 'rate': 50}]

    added = apply_line_item_action(items, {'type': 'add'})
    assert added[-1] == blank_line_item()
    assert len(items) == 1

    edited = apply_line_item_action(added, {'type': 'update', 'index': 1, 'field': 'rate', 'value': '12'})
    assert edited[1]['rate'] == 12.0

    removed = apply_line_item_action(edited, {'type': 'remove', 'index': 0})
    assert [item['rate'] for item in removed] == [12.0]

    with pytest.raises(ValueError):
        apply_line_item_action(items, {'type': 'remove', 'index': 0})
    with pytest.raises(ValueError):
        apply_line_item_action(items, {'type': 'update', 'index': 0, 'field': 'amount', 'value': 5})
    with pytest.raises(ValueError):
        apply_line_item_action(items, {'type': 'duplicate'})
