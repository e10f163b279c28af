"""
Request schemas.

Pydantic models for validating JSON bodies before they reach the services.
A ValidationError raised by `parse_body` is turned into a 400 response by the
app-level error handler (see tariffsmart.web.hooks.handle_validation_error).
"""

from datetime import date
from typing import Any, Dict, List, Literal, Optional, Union

from flask import request
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, field_validator

from tariffsmart.services.tariff_calculator import LineItem
from tariffsmart.web.db.models import (
    AgreementStatus,
    ChallengeType,
    DictionaryCategory,
    Difficulty,
    ModuleCategory,
)

# Largest accepted line amount; keeps every product and total within Decimal precision
MAX_AMOUNT = 1_000_000_000_000


def parse_body(schema):
    """Validate the current request's JSON body against a schema."""
    return schema.model_validate(request.get_json(silent=True) or {})


# ============================================================================
# Calculator
# ============================================================================

class LineItemIn(BaseModel):
    category: str = Field(min_length=1, description="Free-form spending category label")
    amount: float = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Spend amount, single currency")
    country: str = Field(description="Country name, matched exactly against the rate table")

    @field_validator("amount", mode="before")
    @classmethod
    def reject_booleans(cls, value):
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value

    def to_line_item(self) -> LineItem:
        return LineItem.build(self.category, self.amount, self.country)


class CalculationRequest(BaseModel):
    items: List[LineItemIn]

    def line_items(self) -> List[LineItem]:
        return [item.to_line_item() for item in self.items]


class SavedCalculationItem(BaseModel):
    category: str
    amount: float
    country: str


class SavedCalculationData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[SavedCalculationItem]
    total_spending: float = Field(alias="totalSpending")
    total_increase: str = Field(alias="totalIncrease")
    percentage_increase: str = Field(alias="percentageIncrease")


class SaveCalculationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=120)
    calculation_data: SavedCalculationData = Field(alias="calculationData")


# ============================================================================
# Admin / accounts
# ============================================================================

class FeatureFlagUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_enabled: StrictBool = Field(alias="isEnabled")


class SignupRequest(BaseModel):
    username: str = Field(min_length=3, max_length=80)
    password: str = Field(min_length=8)
    email: Optional[EmailStr] = None


class SigninRequest(BaseModel):
    username: str
    password: str


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    gdpr_consent: bool = Field(default=True, alias="gdprConsent")
    source: Optional[str] = None
    ip_address: Optional[str] = Field(default=None, alias="ipAddress")


class SubscriberStatusUpdate(BaseModel):
    status: Literal["active", "unsubscribed"]


# ============================================================================
# Learning
# ============================================================================

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ContentSchema(BaseModel):
    """Base for authoring bodies; enum fields dump as their plain string values."""
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)


class ModuleCreate(ContentSchema):
    title: str = Field(min_length=1)
    slug: str = Field(min_length=1, pattern=SLUG_PATTERN)
    description: str
    difficulty: Difficulty
    estimated_minutes: int = Field(gt=0, alias="estimatedMinutes")
    category: ModuleCategory
    content: str
    published: bool = False


class DictionaryTermCreate(ContentSchema):
    term: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN)
    definition: str = Field(min_length=1)
    category: DictionaryCategory
    example: Optional[str] = None
    related_terms: List[str] = Field(default_factory=list, alias="relatedTerms")


class TradeAgreementCreate(ContentSchema):
    name: str = Field(min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN)
    short_description: str = Field(alias="shortDescription")
    full_description: str = Field(alias="fullDescription")
    key_points: List[str] = Field(default_factory=list, alias="keyPoints")
    countries: List[str] = Field(default_factory=list)
    year: int = Field(ge=1800, le=2200)
    status: AgreementStatus


class DailyChallengeCreate(ContentSchema):
    title: str = Field(min_length=1)
    type: ChallengeType
    difficulty: Difficulty
    content: Dict[str, Any]
    day: date = Field(alias="date")
    points: int = Field(default=10, gt=0)


class QuizSubmission(BaseModel):
    answers: Dict[str, Union[int, List[int]]]
