# backend/models/estimate.py

from .base import db, utcnow, isoformat_utc
from .customer import customer_fields


class Estimate(db.Model):
    __tablename__ = 'estimates'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    total = db.Column(db.Float, default=0.0, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    # Relationships
    customer = db.relationship('Customer', backref=db.backref('estimates', lazy='dynamic'))
    items = db.relationship(
        'EstimateItem',
        backref='estimate',
        lazy='select',
        order_by='EstimateItem.id',
        cascade="all, delete-orphan"
    )

    def to_dict(self, include_items=False):
        """Serializes the Estimate object to a dictionary."""
        data = {
            'id': self.id,
            'customer_id': self.customer_id,
            'total': self.total,
            'created_at': isoformat_utc(self.created_at),
            'item_count': len(self.items),
        }
        data.update(customer_fields(self.customer))
        if include_items:
            data['items'] = [item.to_dict() for item in self.items]
        return data


class EstimateItem(db.Model):
    __tablename__ = 'estimate_items'

    id = db.Column(db.Integer, primary_key=True)
    estimate_id = db.Column(db.Integer, db.ForeignKey('estimates.id'), nullable=False, index=True)
    label = db.Column(db.String(200), default='')
    quantity = db.Column(db.Float, default=1.0, nullable=False)
    rate = db.Column(db.Float, default=0.0, nullable=False)
    amount = db.Column(db.Float, default=0.0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'label': self.label,
            'quantity': self.quantity,
            'rate': self.rate,
            'amount': self.amount
        }
