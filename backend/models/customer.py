# backend/models/customer.py

from .base import db, utcnow, isoformat_utc

NO_CUSTOMER_LABEL = 'No customer'


class Customer(db.Model):
    __tablename__ = 'customers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20))
    email = db.Column(db.String(100))
    address = db.Column(db.String(200))
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'phone': self.phone,
            'email': self.email,
            'address': self.address,
            'notes': self.notes,
            'created_at': isoformat_utc(self.created_at)
        }


def customer_reference(customer):
    """
    Normalize a joined customer into a single optional reference.

    Accepts a Customer, None, or a list/tuple holding at most one Customer so
    that callers only ever see ``{'id', 'name'}`` or ``None``.
    """
    if isinstance(customer, (list, tuple)):
        customer = customer[0] if customer else None
    if customer is None:
        return None
    return {'id': customer.id, 'name': customer.name}


def customer_fields(customer):
    """The customer keys every serialized row carries"""
    reference = customer_reference(customer)
    return {
        'customer': reference,
        'customer_name': reference['name'] if reference else NO_CUSTOMER_LABEL,
    }
