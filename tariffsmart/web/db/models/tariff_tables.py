"""
SQLAlchemy models for tariff reference data.

These tables are populated at startup/import (see tariffsmart.web.db.seed) and
are read-only at request time:
- Country: base + reciprocal tariff percentages per trading partner
- ProductCategory: browsable product groupings with their main source countries
- Product: example consumer products with an estimated price increase
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from tariffsmart.web.db import db
from tariffsmart.web.db.models.base import BaseModel, as_number


# Reciprocal tariff thresholds (percent) for the display label, highest first.
IMPACT_LEVEL_THRESHOLDS = (
    (Decimal("40"), "High"),
    (Decimal("30"), "Medium-High"),
    (Decimal("20"), "Medium"),
    (Decimal("15"), "Medium-Low"),
)


def derive_impact_level(reciprocal_tariff) -> str:
    """Map a reciprocal tariff percentage to a coarse impact label."""
    value = Decimal(str(reciprocal_tariff or 0))
    for threshold, label in IMPACT_LEVEL_THRESHOLDS:
        if value >= threshold:
            return label
    return "Low"


class Country(BaseModel):
    """
    Tariff rates applied to imports from one trading partner.

    Attributes:
        name: Unique display name, matched exactly by the calculator ("China", "EU")
        base_tariff: Flat percentage applied to all imports (e.g. 10)
        reciprocal_tariff: Additional country-specific percentage (e.g. 45)
        effective_date: Display-only date string ("April 9, 2025")
        impact_level: Coarse label, derived from reciprocal_tariff when omitted
    """
    __tablename__ = "countries"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), unique=True, nullable=False, index=True)
    base_tariff = db.Column(db.Numeric(6, 2), nullable=False)
    reciprocal_tariff = db.Column(db.Numeric(6, 2), nullable=False)
    effective_date = db.Column(db.String(64), nullable=True)
    impact_level = db.Column(db.String(32), nullable=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.impact_level and self.reciprocal_tariff is not None:
            self.impact_level = derive_impact_level(self.reciprocal_tariff)

    @property
    def total_tariff(self) -> Decimal:
        return Decimal(str(self.base_tariff)) + Decimal(str(self.reciprocal_tariff))

    @classmethod
    def get_by_name(cls, name: str) -> Optional["Country"]:
        return cls.query.filter_by(name=name).first()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "baseTariff": as_number(self.base_tariff),
            "reciprocalTariff": as_number(self.reciprocal_tariff),
            "effectiveDate": self.effective_date,
            "impactLevel": self.impact_level,
        }

    def __repr__(self):
        return f"<Country {self.name} {self.base_tariff}+{self.reciprocal_tariff}>"


class ProductCategory(BaseModel):
    __tablename__ = "product_categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    primary_countries = db.Column(JSON, nullable=True)  # ["China", "Vietnam"]

    products = db.relationship("Product", back_populates="category", order_by="Product.id")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "primaryCountries": self.primary_countries or [],
        }


class Product(BaseModel):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey("product_categories.id"), nullable=False, index=True)
    origin_country = db.Column(db.String(128), nullable=True)
    current_price = db.Column(db.Numeric(12, 2), nullable=True)
    estimated_increase = db.Column(db.Numeric(6, 2), nullable=True)  # percent
    impact_level = db.Column(db.String(32), nullable=True)

    category = db.relationship("ProductCategory", back_populates="products")

    @classmethod
    def for_category(cls, category_id: int):
        return cls.query.filter_by(category_id=category_id).order_by(cls.id).all()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "categoryId": self.category_id,
            "originCountry": self.origin_country,
            "currentPrice": as_number(self.current_price),
            "estimatedIncrease": as_number(self.estimated_increase),
            "impactLevel": self.impact_level,
        }
