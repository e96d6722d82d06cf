# backend/routes/dashboard.py
from flask import Blueprint, jsonify
from flask_login import login_required
from models import Customer, Job
from middleware.auth import with_auth_context
from services.metrics import month_windows, dashboard_summary
from services.date_utils import now_in_business_tz
import logging

dashboard_bp = Blueprint('dashboard', __name__)
logger = logging.getLogger(__name__)


@dashboard_bp.route('', methods=['GET'])
@login_required
@with_auth_context
def get_dashboard(auth):
    """Customer and job counts with month-over-month growth"""
    try:
        this_month_start, prev_month_start = month_windows(now_in_business_tz())

        total_customers = Customer.query.count()
        customers_before_month = Customer.query.filter(Customer.created_at < this_month_start).count()
        jobs_this_month = Job.query.filter(Job.created_at >= this_month_start).count()
        jobs_last_month = Job.query.filter(
            Job.created_at >= prev_month_start,
            Job.created_at < this_month_start
        ).count()

        summary = dashboard_summary(total_customers, customers_before_month, jobs_this_month, jobs_last_month)
        summary['user'] = {'email': auth.email}
        return jsonify(summary)
    except Exception as e:
        logger.error(f"Error computing dashboard metrics: {str(e)}")
        return jsonify({'error': 'Failed to load dashboard'}), 500
