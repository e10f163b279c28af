from decimal import Decimal
from typing import Any, Dict, List, Optional

from tariffsmart.web.db import db


def as_number(value: Optional[Decimal]) -> Optional[float]:
    """Render a Numeric column for JSON (Decimal is not serializable)."""
    if value is None:
        return None
    return float(value)


class BaseModel(db.Model):
    __abstract__ = True

    @classmethod
    def create(cls, commit: bool = True, **kwargs):
        instance = cls(**kwargs)
        return instance.save(commit)

    @classmethod
    def as_dicts(cls, models) -> List[Dict[str, Any]]:
        return [m.as_dict() for m in models]

    @classmethod
    def find_by(cls, **kwargs):
        return cls.query.filter_by(**kwargs).first()

    @classmethod
    def where(cls, **kwargs):
        return cls.query.filter_by(**kwargs).all()

    @classmethod
    def count(cls, **kwargs) -> int:
        return cls.query.filter_by(**kwargs).count()

    def save(self, commit: bool = True):
        db.session.add(self)
        if commit:
            try:
                db.session.commit()
            except Exception:
                db.session.rollback()
                raise
        return self

    def update(self, commit: bool = True, **kwargs):
        for attr, value in kwargs.items():
            setattr(self, attr, value)
        return self.save(commit)

    def delete(self, commit: bool = True) -> None:
        db.session.delete(self)
        if commit:
            db.session.commit()

    def as_dict(self) -> Dict[str, Any]:
        raise NotImplementedError
