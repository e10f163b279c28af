from werkzeug.security import check_password_hash, generate_password_hash

from tariffsmart.web.db import db
from .base import BaseModel

# Higher rank includes the permissions of every lower rank.
ROLE_HIERARCHY = {
    "anonymous": 0,
    "user": 1,
    "premium": 2,
    "editor": 3,
    "admin": 4,
}

PREMIUM_ROLES = ("premium", "admin")


class User(BaseModel):
    __tablename__ = "user"

    id: int = db.Column(db.Integer, primary_key=True)
    username: str = db.Column(db.String(80), unique=True, nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=True)
    password: str = db.Column(db.String(256), nullable=False)
    role: str = db.Column(db.String(16), nullable=False, default="user")
    is_subscribed: bool = db.Column(db.Boolean, default=False, nullable=False)
    created_on = db.Column(db.DateTime, server_default=db.func.now())

    calculations = db.relationship(
        "SavedCalculation",
        back_populates="user",
        order_by="desc(SavedCalculation.created_at)",
    )

    @classmethod
    def register(cls, username: str, password: str, email=None, role: str = "user"):
        return cls.create(
            username=username,
            email=email,
            password=generate_password_hash(password),
            role=role,
        )

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password, password)

    def has_role(self, required_role: str) -> bool:
        return ROLE_HIERARCHY.get(self.role, 0) >= ROLE_HIERARCHY[required_role]

    @property
    def can_access_premium(self) -> bool:
        return self.role in PREMIUM_ROLES

    def as_dict(self):
        # never expose the password hash
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "isSubscribed": self.is_subscribed,
        }
