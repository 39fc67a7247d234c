from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class Category(str, Enum):
    RESPIRATORY = "respiratory"
    GASTROINTESTINAL = "gastrointestinal"
    NEUROLOGICAL = "neurological"
    MUSCULOSKELETAL = "musculoskeletal"
    SKIN = "skin"
    FLU_LIKE = "flu_like"
    ENT = "ent"
    CARDIAC = "cardiac"
    MENTAL_HEALTH = "mental_health"
    EYE = "eye"


@dataclass(frozen=True)
class CategoryRule:
    category: Category
    keywords: FrozenSet[str]
    priority: int

    def hits(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


# -----------------------------
# RULE TABLE (ascending priority)
# -----------------------------
RULE_TABLE: Tuple[CategoryRule, ...] = (
    CategoryRule(Category.RESPIRATORY, frozenset({
        'cough', 'shortness', 'chest', 'breathing', 'wheeze', 'phlegm', 'sputum'
    }), 1),
    CategoryRule(Category.GASTROINTESTINAL, frozenset({
        'stomach', 'nausea', 'vomit', 'diarrhea', 'constipation', 'abdominal', 'belly'
    }), 2),
    CategoryRule(Category.NEUROLOGICAL, frozenset({
        'headache', 'migraine', 'dizzy', 'nausea', 'confusion', 'neck stiff'
    }), 3),
    CategoryRule(Category.MUSCULOSKELETAL, frozenset({
        'joint', 'back pain', 'knee', 'shoulder', 'muscle', 'stiff', 'ache'
    }), 4),
    CategoryRule(Category.SKIN, frozenset({
        'rash', 'itchy', 'red', 'swollen', 'bump', 'spot', 'dry skin'
    }), 5),
    CategoryRule(Category.FLU_LIKE, frozenset({
        'fever', 'chills', 'body ache', 'muscle pain', 'fatigue', 'tired'
    }), 6),
    CategoryRule(Category.ENT, frozenset({
        'sore throat', 'ear', 'runny nose', 'congestion', 'sneezing', 'throat'
    }), 7),
    CategoryRule(Category.CARDIAC, frozenset({
        'chest pain', 'heart', 'palpitation', 'irregular beat', 'pressure'
    }), 8),
    CategoryRule(Category.MENTAL_HEALTH, frozenset({
        'insomnia', 'sleep', 'anxiety', 'stress', 'depression', 'mood'
    }), 9),
    CategoryRule(Category.EYE, frozenset({
        'eye', 'vision', 'blurry', 'red eye', 'tear', 'light sensitive'
    }), 10),
)


def match(text: str) -> Optional[Category]:
    """Return the highest-priority category with a keyword contained in the text.

    Matching is plain case-insensitive substring containment. Categories are
    never combined: when several hit, only the first by priority is returned.
    """
    lowered = text.lower()
    for rule in sorted(RULE_TABLE, key=lambda r: r.priority):
        if rule.hits(lowered):
            logger.debug("Matched category %s", rule.category.value)
            return rule.category
    logger.debug("No category matched")
    return None


def matching_categories(text: str) -> List[Category]:
    """Every category hit by the text, in priority order. Diagnostic only."""
    lowered = text.lower()
    return [
        rule.category
        for rule in sorted(RULE_TABLE, key=lambda r: r.priority)
        if rule.hits(lowered)
    ]
