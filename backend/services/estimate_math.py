# backend/services/estimate_math.py
"""
Line-item arithmetic for estimates.

Quantities and rates arrive as raw form input. Anything that does not parse
as a finite number counts as 0 so a total can never become NaN. Negative
values and amounts too large to represent are rejected with ValueError.
"""
import math
import logging

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('label', 'quantity', 'rate')


def parse_amount(value):
    """Parse a quantity or rate; invalid input becomes 0.0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def blank_line_item():
    return {'label': '', 'quantity': 1.0, 'rate': 0.0}


def line_item_amount(quantity, rate):
    amount = parse_amount(quantity) * parse_amount(rate)
    if not math.isfinite(amount):
        raise ValueError('Line item amount is too large')
    return amount


def normalize_line_items(raw_items):
    """
    Turn submitted items into clean dicts carrying their own amount.

    Args:
        raw_items (list): dicts with label/quantity/rate keys

    Returns:
        list: dicts with label, quantity, rate and amount

    Raises:
        ValueError: if raw_items is not a list of objects, a quantity or
            rate is negative, or an amount overflows
    """
    if not isinstance(raw_items, list):
        raise ValueError('items must be a list')

    items = []
    for index, raw in enumerate(raw_items):
        position = index + 1
        if not isinstance(raw, dict):
            raise ValueError(f'Line item {position} must be an object')
        quantity = parse_amount(raw.get('quantity'))
        rate = parse_amount(raw.get('rate'))
        if quantity < 0:
            raise ValueError(f'Line item {position}: quantity cannot be negative')
        if rate < 0:
            raise ValueError(f'Line item {position}: rate cannot be negative')
        items.append({
            'label': str(raw.get('label') or '').strip(),
            'quantity': quantity,
            'rate': rate,
            'amount': line_item_amount(quantity, rate),
        })
    return items


def estimate_total(items):
    """Sum of quantity x rate over the current item list"""
    total = sum(line_item_amount(item.get('quantity'), item.get('rate')) for item in items)
    if not math.isfinite(total):
        raise ValueError('Estimate total is too large')
    return total


def can_remove_item(items):
    # An estimate always keeps at least one line
    return len(items) > 1


def _item_index(items, index):
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError('Line item index must be an integer')
    if index < 0 or index >= len(items):
        raise ValueError(f'No line item at position {index}')
    return index


def update_line_item(items, index, field, value):
    """
    Return a new item list with one field edited, mirroring a form edit.
    Labels are kept as text, every other field is parsed as a number.
    """
    index = _item_index(items, index)
    if field not in EDITABLE_FIELDS:
        raise ValueError(f'Cannot edit line item field {field!r}')
    updated = []
    for i, item in enumerate(items):
        if i == index:
            if not isinstance(item, dict):
                raise ValueError(f'Line item {index + 1} must be an object')
            item = dict(item)
            item[field] = value if field == 'label' else parse_amount(value)
        updated.append(item)
    return updated


def remove_line_item(items, index):
    if not can_remove_item(items):
        raise ValueError('An estimate needs at least one line item')
    index = _item_index(items, index)
    return [item for i, item in enumerate(items) if i != index]


def apply_line_item_action(items, action):
    """
    Apply one form action to an item list.

    Args:
        items (list): current (raw) items
        action (dict): ``{"type": "add"}``,
            ``{"type": "update", "index": i, "field": f, "value": v}`` or
            ``{"type": "remove", "index": i}``

    Returns:
        list: the new item list; the input is not modified
    """
    if not isinstance(action, dict):
        raise ValueError('action must be an object')
    kind = action.get('type')
    if kind == 'add':
        return list(items) + [blank_line_item()]
    if kind == 'update':
        return update_line_item(items, action.get('index'), action.get('field'), action.get('value'))
    if kind == 'remove':
        return remove_line_item(items, action.get('index'))
    raise ValueError("action type must be one of: add, update, remove")
