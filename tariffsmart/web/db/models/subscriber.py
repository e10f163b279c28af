from tariffsmart.web.db import db
from .base import BaseModel

SUBSCRIBER_STATUSES = ("active", "unsubscribed")


class EmailSubscriber(BaseModel):
    __tablename__ = "email_subscribers"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    status = db.Column(db.String(16), nullable=False, default="active")
    gdpr_consent = db.Column(db.Boolean, nullable=False, default=True)
    source = db.Column(db.String(64), nullable=True)
    ip_address = db.Column(db.String(64), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    @classmethod
    def subscribe(cls, email: str, **kwargs):
        """Create the subscriber, or reactivate an existing address."""
        existing = cls.find_by(email=email)
        if existing:
            return existing.update(status="active", **kwargs)
        return cls.create(email=email, status="active", **kwargs)

    def as_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "status": self.status,
            "gdprConsent": self.gdpr_consent,
            "source": self.source,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
