# backend/models/event.py

from .base import db, utcnow, isoformat_utc
from .customer import customer_fields


class CalendarEvent(db.Model):
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    # Stored as naive UTC
    start_at = db.Column(db.DateTime, nullable=False, index=True)
    end_at = db.Column(db.DateTime, nullable=False)
    notes = db.Column(db.Text)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    customer = db.relationship('Customer', backref=db.backref('events', lazy='dynamic'))

    def to_dict(self):
        data = {
            'id': self.id,
            'title': self.title,
            'start_at': isoformat_utc(self.start_at),
            'end_at': isoformat_utc(self.end_at),
            'notes': self.notes,
            'customer_id': self.customer_id,
        }
        data.update(customer_fields(self.customer))
        return data
