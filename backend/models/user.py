# backend/models/user.py

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from .base import db, utcnow, isoformat_utc


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), index=True, unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    email_confirmed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    last_login = db.Column(db.DateTime)

    def set_password(self, password):
        """Creates a hashed password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Checks a password against the stored hash."""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'is_active': self.is_active,
            'email_confirmed': self.email_confirmed,
            'last_login': isoformat_utc(self.last_login),
            'created_at': isoformat_utc(self.created_at)
        }

    def __repr__(self):
        return f'<User id={self.id} email={self.email}>'
