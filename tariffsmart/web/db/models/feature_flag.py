from tariffsmart.web.db import db
from .base import BaseModel


class FeatureFlag(BaseModel):
    __tablename__ = "feature_flags"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), unique=True, nullable=False, index=True)
    is_enabled = db.Column(db.Boolean, default=False, nullable=False)
    description = db.Column(db.Text, nullable=True)

    @classmethod
    def is_active(cls, name: str) -> bool:
        """Unknown flags are treated as disabled."""
        flag = cls.find_by(name=name)
        return bool(flag and flag.is_enabled)

    def as_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "isEnabled": self.is_enabled,
            "description": self.description,
        }
