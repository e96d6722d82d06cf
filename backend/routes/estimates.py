# backend/routes/estimates.py
from flask import Blueprint, jsonify
from flask_login import login_required
from models import db, Estimate, EstimateItem, Quote
from routes.common import get_json_body, resolve_customer_id, error_response
from services.estimate_math import (
    normalize_line_items, estimate_total, can_remove_item, apply_line_item_action
)
import logging

estimates_bp = Blueprint('estimates', __name__)
logger = logging.getLogger(__name__)


@estimates_bp.route('', methods=['GET'])
@login_required
def get_estimates():
    """Get all estimates with customer information, newest first"""
    try:
        estimates = Estimate.query.order_by(Estimate.created_at.desc(), Estimate.id.desc()).all()
        return jsonify([estimate.to_dict() for estimate in estimates])
    except Exception as e:
        logger.error(f"Error retrieving estimates: {str(e)}")
        return jsonify({'error': 'Failed to retrieve estimates'}), 500


@estimates_bp.route('/totals', methods=['POST'])
@login_required
def preview_totals():
    """
    Recompute amounts and the running total for an in-progress item list.
    An optional ``action`` (add, update or remove one line) is applied first.
    """
    try:
        data = get_json_body()
        raw_items = data.get('items', [])
        if not isinstance(raw_items, list):
            raise ValueError('items must be a list')
        if data.get('action') is not None:
            raw_items = apply_line_item_action(raw_items, data['action'])
        items = normalize_line_items(raw_items)
        total = estimate_total(items)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({
        'items': items,
        'total': total,
        'can_remove_items': can_remove_item(items)
    })


@estimates_bp.route('/<int:estimate_id>', methods=['GET'])
@login_required
def get_estimate(estimate_id):
    """Get a specific estimate with its line items"""
    estimate = db.get_or_404(Estimate, estimate_id)
    return jsonify(estimate.to_dict(include_items=True))


@estimates_bp.route('', methods=['POST'])
@login_required
def create_estimate():
    """
    Create an estimate and its line items in one transaction.
    The total is recomputed here from the submitted items.
    """
    try:
        data = get_json_body()
        customer_id = resolve_customer_id(data.get('customer_id'), required=True)
        items = normalize_line_items(data.get('items'))
        if not items:
            raise ValueError('At least one line item is required')
        total = estimate_total(items)
    except ValueError as e:
        return error_response(e)

    try:
        estimate = Estimate(customer_id=customer_id, total=total)
        db.session.add(estimate)
        db.session.flush()

        for item in items:
            db.session.add(EstimateItem(
                estimate_id=estimate.id,
                label=item['label'],
                quantity=item['quantity'],
                rate=item['rate'],
                amount=item['amount']
            ))

        db.session.commit()
        db.session.refresh(estimate)

        logger.info(f"Created estimate {estimate.id} with {len(items)} items, total {estimate.total:.2f}")
        return jsonify(estimate.to_dict(include_items=True)), 201

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating estimate: {str(e)}")
        return jsonify({'error': 'Failed to create estimate'}), 500


@estimates_bp.route('/<int:estimate_id>', methods=['DELETE'])
@login_required
def delete_estimate(estimate_id):
    """Delete an estimate and its line items together"""
    estimate = db.get_or_404(Estimate, estimate_id)
    try:
        # Quotes are snapshots and outlive their source estimate
        for quote in Quote.query.filter_by(estimate_id=estimate_id).all():
            quote.estimate_id = None
        # items go with it through the relationship cascade
        db.session.delete(estimate)
        db.session.commit()

        logger.info(f"Deleted estimate {estimate_id}")
        return jsonify({
            'success': True,
            'message': f'Estimate {estimate_id} deleted successfully'
        })

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting estimate {estimate_id}: {str(e)}")
        return jsonify({'error': 'Failed to delete estimate'}), 500
