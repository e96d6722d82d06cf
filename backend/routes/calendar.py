# backend/routes/calendar.py
from flask import Blueprint, request, jsonify
from flask_login import login_required
from models import db, CalendarEvent
from routes.common import get_json_body, optional_text, resolve_customer_id, error_response
from services.calendar_utils import build_month_grid, month_bounds
from services.date_utils import (
    get_business_timezone, now_in_business_tz, parse_job_date,
    parse_time_of_day, local_datetime_to_utc
)
import logging

calendar_bp = Blueprint('calendar', __name__)
logger = logging.getLogger(__name__)

DEFAULT_START_TIME = '09:00'
DEFAULT_END_TIME = '10:00'


def _int_arg(name):
    """An integer query arg; None when absent, ValueError when malformed"""
    raw = request.args.get(name)
    if raw is None or raw.strip() == '':
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer')


def _requested_month(now):
    """year/month query args, defaulting to the current month; month is 0-11"""
    year = _int_arg('year')
    month = _int_arg('month')
    if year is None:
        year = now.year
    if month is None:
        month = now.month - 1
    if not 0 <= month <= 11:
        raise ValueError('month must be between 0 and 11')
    if not 1 <= year <= 9998:
        raise ValueError('year is out of range')
    return year, month


def fetch_month_events(year, month, tz):
    start, end = month_bounds(year, month, tz)
    return CalendarEvent.query.filter(
        CalendarEvent.start_at >= start,
        CalendarEvent.start_at <= end
    ).order_by(CalendarEvent.start_at.asc(), CalendarEvent.id.asc()).all()


@calendar_bp.route('', methods=['GET'])
@login_required
def get_month():
    """Month grid with the events that start in it"""
    tz = get_business_timezone()
    now = now_in_business_tz(tz)
    try:
        year, month = _requested_month(now)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        events = fetch_month_events(year, month, tz)
        grid = build_month_grid(year, month, events, today=now.date(), tz=tz)
        grid['events'] = [event.to_dict() for event in events]
        return jsonify(grid)
    except Exception as e:
        logger.error(f"Error building calendar for {year}-{month + 1:02d}: {str(e)}")
        return jsonify({'error': 'Failed to retrieve calendar'}), 500


@calendar_bp.route('/events', methods=['GET'])
@login_required
def get_events():
    """Events starting within one month, in start order"""
    tz = get_business_timezone()
    try:
        year, month = _requested_month(now_in_business_tz(tz))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        events = fetch_month_events(year, month, tz)
        return jsonify([event.to_dict() for event in events])
    except Exception as e:
        logger.error(f"Error retrieving events: {str(e)}")
        return jsonify({'error': 'Failed to retrieve events'}), 500


@calendar_bp.route('/events', methods=['POST'])
@login_required
def create_event():
    """
    Create an appointment from a local date and start/end wall-clock times.
    Times are read in the business timezone and stored as UTC.
    """
    try:
        data = get_json_body()
        title = optional_text(data.get('title'))
        if not title:
            raise ValueError('Title is required')
        day = parse_job_date(data.get('date'))
        if day is None:
            raise ValueError('Date is required')
        start_time = parse_time_of_day(data.get('start_time') or DEFAULT_START_TIME)
        end_time = parse_time_of_day(data.get('end_time') or DEFAULT_END_TIME)

        tz = get_business_timezone()
        start_at = local_datetime_to_utc(day, start_time, tz)
        end_at = local_datetime_to_utc(day, end_time, tz)
        if end_at < start_at:
            raise ValueError('End time must not be before start time')

        customer_id = resolve_customer_id(data.get('customer_id'))
    except ValueError as e:
        return error_response(e)

    try:
        event = CalendarEvent(
            title=title,
            customer_id=customer_id,
            start_at=start_at,
            end_at=end_at,
            notes=optional_text(data.get('notes'))
        )
        db.session.add(event)
        db.session.commit()
        logger.info(f"Created event {event.id} '{event.title}' at {event.start_at.isoformat()}Z")
        return jsonify(event.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating event: {str(e)}")
        return jsonify({'error': f'Failed to create event: {str(e)}'}), 500


@calendar_bp.route('/events/<int:event_id>', methods=['GET'])
@login_required
def get_event(event_id):
    event = db.get_or_404(CalendarEvent, event_id)
    return jsonify(event.to_dict())


@calendar_bp.route('/events/<int:event_id>', methods=['DELETE'])
@login_required
def delete_event(event_id):
    """Delete an appointment"""
    event = db.get_or_404(CalendarEvent, event_id)
    try:
        db.session.delete(event)
        db.session.commit()
        logger.info(f"Deleted event {event_id}")
        return jsonify({
            'success': True,
            'message': f'Event {event_id} deleted successfully'
        })
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting event {event_id}: {str(e)}")
        return jsonify({'error': f'Failed to delete event: {str(e)}'}), 500
