# backend/models/job.py

from .base import db, utcnow, isoformat_utc
from .customer import customer_fields

JOB_STATUSES = ['scheduled', 'in_progress', 'done']
JOB_STATUS_LABELS = {
    'scheduled': 'Scheduled',
    'in_progress': 'In Progress',
    'done': 'Done',
}
FINISH_OPTIONS = ['flat', 'eggshell', 'satin', 'semi-gloss', 'gloss']


class Job(db.Model):
    __tablename__ = 'jobs'

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id', ondelete='SET NULL'), nullable=True)
    date = db.Column(db.Date, nullable=False, index=True)
    status = db.Column(db.String(20), default='scheduled', nullable=False)
    areas = db.Column(db.Text)
    paint_colors = db.Column(db.Text)
    finish = db.Column(db.String(20))
    materials = db.Column(db.Text)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    customer = db.relationship('Customer', backref=db.backref('jobs', lazy='dynamic'))

    def to_dict(self):
        data = {
            'id': self.id,
            'customer_id': self.customer_id,
            'date': self.date.isoformat() if self.date else None,
            'status': self.status,
            'status_label': JOB_STATUS_LABELS.get(self.status, self.status),
            'areas': self.areas,
            'paint_colors': self.paint_colors,
            'finish': self.finish,
            'materials': self.materials,
            'notes': self.notes,
            'created_at': isoformat_utc(self.created_at),
            'updated_at': isoformat_utc(self.updated_at),
        }
        data.update(customer_fields(self.customer))
        return data
