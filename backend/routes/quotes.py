# backend/routes/quotes.py
from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from models import db, Quote, Estimate, EstimateItem, QUOTE_STATUSES
from routes.common import get_json_body, optional_text, error_response, NotFoundError
from services.quote_math import quote_totals, parse_valid_days, valid_until
from services.date_utils import today_in_business_tz
from services.quote_pdf import quote_pdf_response
import logging

quotes_bp = Blueprint('quotes', __name__)
logger = logging.getLogger(__name__)


def next_quote_number():
    """Sequential quote numbers starting at 1"""
    current_max = db.session.query(func.max(Quote.quote_number)).scalar()
    return (current_max or 0) + 1


def _source_estimate(data):
    estimate_id = data.get('estimate_id')
    if estimate_id in (None, ''):
        raise ValueError('Estimate is required')
    try:
        estimate_id = int(estimate_id)
    except (TypeError, ValueError):
        raise ValueError('estimate_id must be an integer')
    estimate = db.session.get(Estimate, estimate_id)
    if estimate is None:
        raise NotFoundError('Estimate not found')
    return estimate


def _quote_terms(data):
    """valid_days and tax_rate with their configured defaults"""
    cfg = current_app.config
    valid_days = parse_valid_days(data.get('valid_days'), default=cfg.get('DEFAULT_QUOTE_VALID_DAYS', 30))
    tax_rate = data.get('tax_rate')
    if tax_rate in (None, ''):
        tax_rate = cfg.get('DEFAULT_TAX_RATE', 0)
    return valid_days, tax_rate


def source_items(quote):
    """
    Line items of the estimate a quote came from, for display only.
    Empty once the estimate is gone.
    """
    if quote.estimate_id is None:
        return []
    return EstimateItem.query.filter_by(estimate_id=quote.estimate_id).order_by(EstimateItem.id).all()


@quotes_bp.route('', methods=['GET'])
@login_required
def get_quotes():
    """Get all quotes, newest first"""
    try:
        quotes = Quote.query.order_by(Quote.created_at.desc(), Quote.id.desc()).all()
        return jsonify([quote.to_dict() for quote in quotes])
    except Exception as e:
        logger.error(f"Error retrieving quotes: {str(e)}")
        return jsonify({'error': 'Failed to retrieve quotes'}), 500


@quotes_bp.route('/defaults', methods=['GET'])
@login_required
def get_quote_defaults():
    """Initial values for the new-quote form"""
    cfg = current_app.config
    return jsonify({
        'valid_days': cfg.get('DEFAULT_QUOTE_VALID_DAYS', 30),
        'tax_rate': cfg.get('DEFAULT_TAX_RATE', 0),
        'terms': cfg.get('DEFAULT_QUOTE_TERMS'),
        'statuses': QUOTE_STATUSES
    })


@quotes_bp.route('/preview', methods=['POST'])
@login_required
def preview_quote():
    """Totals and validity date a quote would get, without saving it"""
    try:
        data = get_json_body()
        # a bare subtotal previews before an estimate is picked
        estimate = None
        if data.get('estimate_id') in (None, '') and 'subtotal' in data:
            subtotal = data.get('subtotal')
        else:
            estimate = _source_estimate(data)
            subtotal = estimate.total
        valid_days, tax_rate = _quote_terms(data)
        totals = quote_totals(subtotal, tax_rate)
        expires = valid_until(today_in_business_tz(), valid_days)
    except ValueError as e:
        return error_response(e)

    totals['valid_until'] = expires.isoformat()
    totals['estimate_id'] = estimate.id if estimate is not None else None
    return jsonify(totals)


@quotes_bp.route('', methods=['POST'])
@login_required
def create_quote():
    """
    Create a quote from an estimate.

    Subtotal, tax and total are computed once here and stored; they are not
    updated if the estimate changes later.
    """
    try:
        data = get_json_body()
        estimate = _source_estimate(data)
        valid_days, tax_rate = _quote_terms(data)
        totals = quote_totals(estimate.total, tax_rate)
        expires = valid_until(today_in_business_tz(), valid_days)
    except ValueError as e:
        return error_response(e)

    terms = data.get('terms', current_app.config.get('DEFAULT_QUOTE_TERMS'))

    try:
        quote = Quote(
            quote_number=next_quote_number(),
            estimate_id=estimate.id,
            customer_id=estimate.customer_id,
            valid_until=expires,
            tax_rate=totals['tax_rate'],
            subtotal=totals['subtotal'],
            tax_amount=totals['tax_amount'],
            total=totals['total'],
            notes=optional_text(data.get('notes')),
            terms=optional_text(terms),
            status='draft'
        )
        db.session.add(quote)
        db.session.commit()

        logger.info(f"Created quote #{quote.quote_number} (ID: {quote.id}) from estimate {estimate.id}, total {quote.total:.2f}")
        return jsonify(quote.to_dict()), 201

    except IntegrityError as e:
        db.session.rollback()
        logger.error(f"Quote number collision while creating quote: {str(e)}")
        return jsonify({'error': 'Quote number already taken, please retry'}), 409
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating quote: {str(e)}")
        return jsonify({'error': 'Failed to create quote'}), 500


@quotes_bp.route('/<int:quote_id>', methods=['GET'])
@login_required
def get_quote(quote_id):
    """A quote with the line items of its source estimate"""
    quote = db.get_or_404(Quote, quote_id)
    try:
        data = quote.to_dict()
        data['items'] = [item.to_dict() for item in source_items(quote)]
        return jsonify(data)
    except Exception as e:
        logger.error(f"Error retrieving quote {quote_id}: {str(e)}")
        return jsonify({'error': 'Failed to retrieve quote'}), 500


@quotes_bp.route('/<int:quote_id>/status', methods=['PUT'])
@login_required
def update_quote_status(quote_id):
    """Set the status; any status may follow any other"""
    quote = db.get_or_404(Quote, quote_id)
    try:
        data = get_json_body()
        new_status = data.get('status')
        if new_status not in QUOTE_STATUSES:
            raise ValueError(f'Invalid status. Must be one of: {QUOTE_STATUSES}')
    except ValueError as e:
        return error_response(e)

    try:
        old_status = quote.status
        quote.status = new_status
        db.session.commit()
        logger.info(f"Quote #{quote.quote_number} status updated from '{old_status}' to '{new_status}'")
        return jsonify(quote.to_dict()), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating status for quote {quote_id}: {str(e)}")
        return jsonify({'error': 'Failed to update quote status'}), 500


@quotes_bp.route('/<int:quote_id>/pdf', methods=['GET'])
@login_required
def get_quote_pdf(quote_id):
    """Customer-facing PDF of a quote"""
    quote = db.get_or_404(Quote, quote_id)
    try:
        return quote_pdf_response(quote, source_items(quote))
    except Exception as e:
        logger.error(f"Error rendering quote {quote_id}: {str(e)}")
        return jsonify({'error': 'Failed to generate quote PDF'}), 500


@quotes_bp.route('/<int:quote_id>', methods=['DELETE'])
@login_required
def delete_quote(quote_id):
    """Delete a quote"""
    quote = db.get_or_404(Quote, quote_id)
    try:
        db.session.delete(quote)
        db.session.commit()
        logger.info(f"Deleted quote {quote_id}")
        return jsonify({
            'success': True,
            'message': f'Quote {quote_id} deleted successfully'
        })
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting quote {quote_id}: {str(e)}")
        return jsonify({'error': 'Failed to delete quote'}), 500
