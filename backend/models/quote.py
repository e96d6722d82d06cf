# backend/models/quote.py

from .base import db, utcnow, isoformat_utc
from .customer import customer_fields

QUOTE_STATUSES = ['draft', 'sent', 'accepted', 'rejected']
QUOTE_STATUS_LABELS = {
    'draft': 'Draft',
    'sent': 'Sent',
    'accepted': 'Accepted',
    'rejected': 'Rejected',
}


class Quote(db.Model):
    __tablename__ = 'quotes'

    id = db.Column(db.Integer, primary_key=True)
    quote_number = db.Column(db.Integer, unique=True, nullable=False)
    estimate_id = db.Column(db.Integer, db.ForeignKey('estimates.id', ondelete='SET NULL'), nullable=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    valid_until = db.Column(db.Date, nullable=True)

    # Snapshot taken at creation; never recomputed from the estimate
    tax_rate = db.Column(db.Float, default=0.0, nullable=False)
    subtotal = db.Column(db.Float, default=0.0, nullable=False)
    tax_amount = db.Column(db.Float, default=0.0, nullable=False)
    total = db.Column(db.Float, default=0.0, nullable=False)

    notes = db.Column(db.Text)
    terms = db.Column(db.Text)
    status = db.Column(db.String(20), default='draft', nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    customer = db.relationship('Customer', backref=db.backref('quotes', lazy='dynamic'))
    estimate = db.relationship('Estimate', backref=db.backref('quotes', lazy='dynamic'))

    def to_dict(self):
        data = {
            'id': self.id,
            'quote_number': self.quote_number,
            'estimate_id': self.estimate_id,
            'customer_id': self.customer_id,
            'valid_until': self.valid_until.isoformat() if self.valid_until else None,
            'tax_rate': self.tax_rate,
            'subtotal': self.subtotal,
            'tax_amount': self.tax_amount,
            'total': self.total,
            'notes': self.notes,
            'terms': self.terms,
            'status': self.status,
            'status_label': QUOTE_STATUS_LABELS.get(self.status, self.status),
            'created_at': isoformat_utc(self.created_at)
        }
        data.update(customer_fields(self.customer))
        if self.customer is not None:
            data['customer_details'] = self.customer.to_dict()
        else:
            data['customer_details'] = None
        return data
