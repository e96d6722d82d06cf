# backend/routes/jobs.py
from flask import Blueprint, request, jsonify
from flask_login import login_required
from models import db, Job, JOB_STATUSES, FINISH_OPTIONS
from routes.common import get_json_body, optional_text, resolve_customer_id, error_response
from services.date_utils import parse_job_date, today_in_business_tz
import logging

jobs_bp = Blueprint('jobs', __name__)
logger = logging.getLogger(__name__)

TEXT_FIELDS = ['areas', 'paint_colors', 'materials', 'notes']


def partition_jobs(jobs, today):
    """
    Split date-ordered jobs into upcoming and past.

    Upcoming: dated today or later and not done. Past: everything else.
    """
    upcoming = [job for job in jobs if job.date >= today and job.status != 'done']
    past = [job for job in jobs if job.date < today or job.status == 'done']
    return upcoming, past


def _validate_status(status):
    if status not in JOB_STATUSES:
        raise ValueError(f'Invalid status. Must be one of: {JOB_STATUSES}')
    return status


def _validate_finish(finish):
    finish = optional_text(finish)
    if finish is not None and finish not in FINISH_OPTIONS:
        raise ValueError(f'Invalid finish. Must be one of: {FINISH_OPTIONS}')
    return finish


def _apply_job_fields(job, data, partial):
    """Copy submitted fields onto a job; a full write resets omitted ones"""
    if not partial or 'customer_id' in data:
        job.customer_id = resolve_customer_id(data.get('customer_id'))
    if not partial or 'date' in data:
        job_date = parse_job_date(data.get('date'))
        if job_date is None:
            raise ValueError('Date is required')
        job.date = job_date
    if not partial or 'status' in data:
        job.status = _validate_status(data.get('status') or 'scheduled')
    if not partial or 'finish' in data:
        job.finish = _validate_finish(data.get('finish'))
    for field in TEXT_FIELDS:
        if not partial or field in data:
            setattr(job, field, optional_text(data.get(field)))


@jobs_bp.route('', methods=['GET'])
@login_required
def get_jobs():
    """Jobs ordered by date, split into upcoming and past"""
    try:
        jobs = Job.query.order_by(Job.date.asc(), Job.id.asc()).all()
        upcoming, past = partition_jobs(jobs, today_in_business_tz())
        return jsonify({
            'upcoming': [job.to_dict() for job in upcoming],
            'past': [job.to_dict() for job in past],
            'total': len(jobs)
        })
    except Exception as e:
        logger.error(f"Error retrieving jobs: {str(e)}")
        return jsonify({'error': f'Failed to retrieve jobs: {str(e)}'}), 500


@jobs_bp.route('/options', methods=['GET'])
@login_required
def get_job_options():
    """Status and finish choices for job forms"""
    return jsonify({'statuses': JOB_STATUSES, 'finishes': FINISH_OPTIONS})


@jobs_bp.route('', methods=['POST'])
@login_required
def create_job():
    """Create a job"""
    try:
        data = get_json_body()
        job = Job()
        _apply_job_fields(job, data, partial=False)
    except ValueError as e:
        return error_response(e)

    try:
        db.session.add(job)
        db.session.commit()
        logger.info(f"Created job {job.id} for {job.date.isoformat()} ({job.status})")
        return jsonify(job.to_dict()), 201
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating job: {str(e)}")
        return jsonify({'error': f'Failed to create job: {str(e)}'}), 500


@jobs_bp.route('/<int:job_id>', methods=['GET'])
@login_required
def get_job(job_id):
    """Get a job by ID"""
    job = db.get_or_404(Job, job_id)
    return jsonify(job.to_dict())


@jobs_bp.route('/<int:job_id>', methods=['PUT', 'PATCH'])
@login_required
def update_job(job_id):
    """Update a job; PATCH only touches the fields that were sent"""
    job = db.get_or_404(Job, job_id)
    try:
        data = get_json_body()
        _apply_job_fields(job, data, partial=request.method == 'PATCH')
    except ValueError as e:
        db.session.rollback()
        return error_response(e)

    try:
        db.session.commit()
        logger.info(f"Updated job {job_id}")
        return jsonify(job.to_dict()), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating job {job_id}: {str(e)}")
        return jsonify({'error': f'Failed to update job: {str(e)}'}), 500


@jobs_bp.route('/<int:job_id>/status', methods=['PUT'])
@login_required
def update_job_status(job_id):
    """Update job status"""
    job = db.get_or_404(Job, job_id)
    try:
        data = get_json_body()
        new_status = _validate_status(data.get('status'))
    except ValueError as e:
        return error_response(e)

    try:
        old_status = job.status
        job.status = new_status
        db.session.commit()
        logger.info(f"Job {job_id} status updated from '{old_status}' to '{new_status}'")
        return jsonify(job.to_dict()), 200
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating job status for job {job_id}: {str(e)}", exc_info=True)
        return jsonify({'error': f'Failed to update job status: {str(e)}'}), 500


@jobs_bp.route('/<int:job_id>', methods=['DELETE'])
@login_required
def delete_job(job_id):
    """Delete a job"""
    job = db.get_or_404(Job, job_id)
    try:
        db.session.delete(job)
        db.session.commit()
        logger.info(f"Deleted job {job_id}")
        return jsonify({
            'success': True,
            'message': f'Job {job_id} deleted successfully'
        })
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting job {job_id}: {str(e)}")
        return jsonify({'error': f'Failed to delete job: {str(e)}'}), 500
