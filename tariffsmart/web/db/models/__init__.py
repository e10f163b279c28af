from .base import BaseModel as Model
from .user import User
from .tariff_tables import Country, ProductCategory, Product, derive_impact_level
from .feature_flag import FeatureFlag
from .saved_calculation import SavedCalculation
from .subscriber import EmailSubscriber
from .learning import (
    AgreementStatus,
    ChallengeType,
    DictionaryCategory,
    Difficulty,
    ModuleCategory,
    LearningModule,
    Quiz,
    QuizQuestion,
    QuizOption,
    QuizAttempt,
    DictionaryTerm,
    TradeAgreement,
    DailyChallenge,
    ChallengeCompletion,
    slugify,
)
