# backend/routes/customers.py
from flask import Blueprint, jsonify
from flask_login import login_required
from models import db, Customer, Job, CalendarEvent, Estimate, Quote
from routes.common import get_json_body, optional_text, validate_email
import logging

customers_bp = Blueprint('customers', __name__)
logger = logging.getLogger(__name__)


@customers_bp.route('', methods=['GET'])
@login_required
def get_customers():
    """Get all customers, newest first"""
    try:
        customers = Customer.query.order_by(Customer.created_at.desc(), Customer.id.desc()).all()
        return jsonify([customer.to_dict() for customer in customers])
    except Exception as e:
        logger.error(f"Error retrieving customers: {str(e)}")
        return jsonify({'error': 'Failed to retrieve customers'}), 500


@customers_bp.route('/options', methods=['GET'])
@login_required
def get_customer_options():
    """Id/name pairs for customer pickers, ordered by name"""
    try:
        customers = Customer.query.with_entities(Customer.id, Customer.name).order_by(Customer.name, Customer.id).all()
        return jsonify([{'id': c.id, 'name': c.name} for c in customers])
    except Exception as e:
        logger.error(f"Error retrieving customer options: {str(e)}")
        return jsonify({'error': 'Failed to retrieve customers'}), 500


@customers_bp.route('', methods=['POST'])
@login_required
def create_customer():
    """Create a new customer"""
    try:
        data = get_json_body()
        name = optional_text(data.get('name'))
        if not name:
            return jsonify({'error': 'Customer name is required'}), 400
        email = validate_email(optional_text(data.get('email')))
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        customer = Customer(
            name=name,
            phone=optional_text(data.get('phone')),
            email=email,
            address=optional_text(data.get('address')),
            notes=optional_text(data.get('notes'))
        )
        db.session.add(customer)
        db.session.commit()

        logger.info(f"Created customer {customer.id} ('{customer.name}')")
        return jsonify(customer.to_dict()), 201

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating customer: {str(e)}")
        return jsonify({'error': f'Failed to create customer: {str(e)}'}), 500


@customers_bp.route('/<int:customer_id>', methods=['GET'])
@login_required
def get_customer(customer_id):
    """Get a specific customer"""
    customer = db.get_or_404(Customer, customer_id)
    return jsonify(customer.to_dict())


@customers_bp.route('/<int:customer_id>', methods=['DELETE'])
@login_required
def delete_customer(customer_id):
    """Delete a customer; rows that referenced it keep existing without a customer"""
    customer = db.get_or_404(Customer, customer_id)
    try:
        for model in (Job, CalendarEvent, Estimate, Quote):
            for row in model.query.filter_by(customer_id=customer_id).all():
                row.customer_id = None
        db.session.delete(customer)
        db.session.commit()

        logger.info(f"Deleted customer {customer_id}")
        return jsonify({
            'success': True,
            'message': f'Customer {customer_id} deleted successfully'
        })

    except Exception as e:
        db.session.rollback()
        logger.error(f"Error deleting customer {customer_id}: {str(e)}")
        return jsonify({
            'success': False,
            'error': f'Failed to delete customer: {str(e)}',
            'error_type': type(e).__name__
        }), 500
