from tariffsmart.web.db import db
from .base import BaseModel


class SavedCalculation(BaseModel):
    """A named calculator result kept on a user's profile."""
    __tablename__ = "saved_calculations"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    data = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    user = db.relationship("User", back_populates="calculations")

    def as_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "data": self.data,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
