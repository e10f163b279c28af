"""
Reference data for a fresh database.

Rates as announced April 9, 2025 (10% baseline tariff on all imports plus a
country-specific reciprocal tariff).

Seeding only creates rows that are missing (matched by natural key), so it is
safe to run repeatedly; rows edited at runtime (e.g. a toggled feature flag)
are left alone. With if_empty=True nothing is touched once the feature_flags
table has rows, which is what startup seeding uses.
"""

import logging
from typing import Dict

from tariffsmart.web.db import db
from tariffsmart.web.db.models import (
    ChallengeCompletion,
    Country,
    DailyChallenge,
    DictionaryTerm,
    FeatureFlag,
    LearningModule,
    Product,
    ProductCategory,
    Quiz,
    QuizAttempt,
    QuizOption,
    QuizQuestion,
    TradeAgreement,
)

logger = logging.getLogger(__name__)

EFFECTIVE_DATE = "April 9, 2025"
BASE_TARIFF = 10

# (name, reciprocal %, impact label)
COUNTRIES = [
    ("China", 45, "High"),
    ("Vietnam", 25, "Medium"),
    ("Mexico", 15, "Medium-Low"),
    ("Canada", 10, "Low"),
    ("South Korea", 30, "Medium-High"),
    ("Japan", 25, "Medium"),
    ("EU", 20, "Medium"),
    ("Bangladesh", 15, "Low"),
    ("India", 35, "Medium-High"),
    ("Brazil", 20, "Medium"),
]

CATEGORIES = [
    {
        "name": "Electronics",
        "description": "Consumer electronics and gadgets",
        "primary_countries": ["China", "South Korea", "Japan"],
        "products": [
            ("Smartphones", "Mobile phones and accessories", "China", 899, 40.5, "High"),
            ("Laptops", "Portable computers", "China", 1200, 54, "High"),
            ("TVs", "Televisions and home entertainment", "South Korea", 750, 22.5, "Medium"),
        ],
    },
    {
        "name": "Clothing & Apparel",
        "description": "Clothing, footwear, and accessories",
        "primary_countries": ["Vietnam", "Bangladesh", "China"],
        "products": [
            ("T-Shirts", "Casual cotton shirts", "Bangladesh", 15, 1.5, "Low"),
            ("Jeans", "Denim pants", "Vietnam", 45, 6.75, "Medium"),
        ],
    },
    {
        "name": "Toys & Games",
        "description": "Children's toys and games",
        "primary_countries": ["China", "Vietnam", "Mexico"],
        "products": [
            ("Action Figures", "Collectible toys", "China", 25, 11.25, "High"),
            ("Board Games", "Family board games", "China", 35, 15.75, "High"),
        ],
    },
    {
        "name": "Furniture & Home Goods",
        "description": "Home furniture and decorative items",
        "primary_countries": ["China", "Vietnam", "Mexico"],
        "products": [
            ("Sofas", "Living room furniture", "Vietnam", 899, 134.85, "Medium"),
            ("Coffee Tables", "Living room tables", "China", 250, 112.5, "High"),
        ],
    },
    {
        "name": "Food & Beverages",
        "description": "Imported food products and beverages",
        "primary_countries": ["Mexico", "Canada", "EU"],
        "products": [
            ("Imported Chocolates", "Premium chocolate assortments", "EU", 12, 1.8, "Medium"),
            ("Imported Cheese", "Specialty cheeses", "EU", 15, 2.25, "Medium"),
            ("Imported Wines", "Premium wines", "EU", 35, 5.25, "Medium"),
        ],
    },
]

FEATURE_FLAGS = [
    ("productFiltering", True, "Enables product filtering functionality"),
    ("calculator", True, "Enables the tariff calculator tool"),
    ("authentication", False, "Enables user authentication features"),
    ("emailAlerts", True, "Enables email alert signup functionality"),
    ("alternativeProducts", False, "Enables alternative product recommendations"),
    ("ENABLE_LEARNING_MODULES", True, "Enable learning modules features"),
    ("ENABLE_QUIZZES", True, "Enable quiz features"),
    ("ENABLE_DICTIONARY", True, "Enable the trade dictionary"),
    ("ENABLE_TRADE_AGREEMENTS", True, "Enable trade agreements database"),
]

DICTIONARY_TERMS = [
    {
        "term": "Tariff",
        "definition": "A tax imposed by a government on imported goods, usually a percentage of their value.",
        "category": "tariffs",
        "example": "A 10% tariff on a $100 import adds $10 to its landed cost.",
        "related_terms": ["Duty", "Reciprocal Tariff"],
    },
    {
        "term": "Reciprocal Tariff",
        "definition": "An additional country-specific tariff set in response to that country's trade barriers.",
        "category": "tariffs",
        "example": "Imports from China carry a 45% reciprocal tariff on top of the 10% baseline.",
        "related_terms": ["Tariff", "Base Tariff"],
    },
    {
        "term": "Base Tariff",
        "definition": "A flat tariff applied uniformly to all imports regardless of origin.",
        "category": "tariffs",
        "example": None,
        "related_terms": ["Reciprocal Tariff"],
    },
    {
        "term": "Country of Origin",
        "definition": "The country where a product was manufactured or substantially transformed.",
        "category": "customs",
        "example": None,
        "related_terms": ["Rules of Origin"],
    },
    {
        "term": "Free Trade Agreement",
        "definition": "A pact between countries to reduce or eliminate tariffs and other trade barriers.",
        "category": "agreements",
        "example": "USMCA is a free trade agreement between the US, Mexico and Canada.",
        "related_terms": ["USMCA"],
    },
]

TRADE_AGREEMENTS = [
    {
        "name": "United States-Mexico-Canada Agreement (USMCA)",
        "short_description": "Trade pact replacing NAFTA between the US, Mexico and Canada.",
        "full_description": "USMCA modernized NAFTA with new rules of origin for autos, "
                            "digital trade provisions and labor commitments.",
        "key_points": ["Higher regional value content for autos", "Digital trade chapter"],
        "countries": ["United States", "Mexico", "Canada"],
        "year": 2020,
        "status": "active",
    },
    {
        "name": "US-Korea Free Trade Agreement (KORUS)",
        "short_description": "Bilateral agreement eliminating most tariffs between the US and South Korea.",
        "full_description": "KORUS removed tariffs on the majority of industrial and consumer goods "
                            "traded between the two countries.",
        "key_points": ["Phased tariff elimination", "Automotive provisions"],
        "countries": ["United States", "South Korea"],
        "year": 2012,
        "status": "active",
    },
]

TARIFF_BASICS_MODULE = {
    "title": "Tariff Basics",
    "slug": "tariff-basics",
    "description": "What tariffs are, who pays them and how they reach shelf prices.",
    "difficulty": "beginner",
    "estimated_minutes": 10,
    "category": "tariffs",
    "content": "A tariff is a tax on imports, paid by the importer and usually passed on to consumers.",
    "published": True,
}

TARIFF_BASICS_QUIZ = {
    "title": "Tariff Basics Quiz",
    "slug": "tariff-basics-quiz",
    "description": "Check your understanding of how tariffs work.",
    "passing_score": 70,
    "published": True,
    "questions": [
        {
            "question": "Who pays a tariff to US Customs?",
            "explanation": "The importer of record pays the duty when goods enter the country.",
            "options": [("The exporting country", False), ("The importer", True), ("The retailer's customers", False)],
        },
        {
            "question": "China's rate is 10% base plus 45% reciprocal. What is the total tariff?",
            "explanation": "Base and reciprocal percentages add: 10 + 45 = 55%.",
            "options": [("45%", False), ("55%", True), ("4.5%", False)],
        },
    ],
}


def _seed_countries() -> int:
    created = 0
    for name, reciprocal, impact_level in COUNTRIES:
        if Country.get_by_name(name):
            continue
        Country.create(
            commit=False,
            name=name,
            base_tariff=BASE_TARIFF,
            reciprocal_tariff=reciprocal,
            effective_date=EFFECTIVE_DATE,
            impact_level=impact_level,
        )
        created += 1
    return created


def _seed_catalog() -> int:
    created = 0
    for entry in CATEGORIES:
        category = ProductCategory.find_by(name=entry["name"])
        if not category:
            category = ProductCategory.create(
                commit=False,
                name=entry["name"],
                description=entry["description"],
                primary_countries=entry["primary_countries"],
            )
            db.session.flush()
            created += 1

        for name, description, origin, price, increase, impact in entry["products"]:
            if Product.find_by(name=name, category_id=category.id):
                continue
            Product.create(
                commit=False,
                name=name,
                description=description,
                category_id=category.id,
                origin_country=origin,
                current_price=price,
                estimated_increase=increase,
                impact_level=impact,
            )
            created += 1
    return created


def _seed_feature_flags() -> int:
    created = 0
    for name, is_enabled, description in FEATURE_FLAGS:
        if FeatureFlag.find_by(name=name):
            continue
        FeatureFlag.create(commit=False, name=name, is_enabled=is_enabled, description=description)
        created += 1
    return created


def _seed_learning() -> int:
    created = 0
    for entry in DICTIONARY_TERMS:
        if DictionaryTerm.find_by(term=entry["term"], category=entry["category"]):
            continue
        DictionaryTerm.create(commit=False, **entry)
        created += 1

    for entry in TRADE_AGREEMENTS:
        if TradeAgreement.find_by(name=entry["name"]):
            continue
        TradeAgreement.create(commit=False, **entry)
        created += 1

    module = LearningModule.find_by(slug=TARIFF_BASICS_MODULE["slug"])
    if not module:
        module = LearningModule.create(commit=False, **TARIFF_BASICS_MODULE)
        db.session.flush()
        created += 1

    quiz_data = dict(TARIFF_BASICS_QUIZ)
    questions = quiz_data.pop("questions")
    if not Quiz.find_by(slug=quiz_data["slug"]):
        quiz = Quiz.create(commit=False, module_id=module.id, **quiz_data)
        db.session.flush()
        for order, q in enumerate(questions, start=1):
            question = QuizQuestion.create(
                commit=False,
                quiz_id=quiz.id,
                question=q["question"],
                explanation=q["explanation"],
                order=order,
            )
            db.session.flush()
            for opt_order, (text, is_correct) in enumerate(q["options"], start=1):
                QuizOption.create(
                    commit=False,
                    question_id=question.id,
                    text=text,
                    is_correct=is_correct,
                    order=opt_order,
                )
        created += 1

    return created


def reset_reference_data() -> None:
    """
    Delete all reference rows, along with the quiz attempts and challenge
    completions that point at them. Users, subscribers and saved calculations
    are kept.
    """
    # Children before parents
    for Model in (ChallengeCompletion, DailyChallenge, QuizAttempt, QuizOption, QuizQuestion,
                  Quiz, LearningModule, DictionaryTerm, TradeAgreement, Product, ProductCategory,
                  Country, FeatureFlag):
        Model.query.delete()
    db.session.commit()
    logger.info("Reference data deleted")


def seed_reference_data(if_empty: bool = False) -> Dict[str, int]:
    """Create missing reference rows. Returns rows created per group."""
    if if_empty and FeatureFlag.count() > 0:
        logger.info("Database already contains data, skipping initialization")
        return {}

    try:
        counts = {
            "countries": _seed_countries(),
            "catalog": _seed_catalog(),
            "feature_flags": _seed_feature_flags(),
            "learning": _seed_learning(),
        }
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Reference data seeded: %s", counts)
    return counts
