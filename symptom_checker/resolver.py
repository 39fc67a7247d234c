"""Turns a validated symptom query into the response sent back to the caller.

Two paths exist. With an external classifier configured, the classifier's
answer is used as-is and any failure degrades to the UNAVAILABLE template.
Without one, the keyword matcher picks a category and its static template is
returned. Either way the resolver stamps the disclaimer, a timestamp and the
echoed query onto the result.
"""
from datetime import datetime, timezone
from typing import Optional
import asyncio, logging

from .classifier import ClassificationError, ExternalClassifier
from .prompts import build_prompt
from .rules import match, matching_categories
from .schemas import AnalysisResult, CategoryResponse, QueryInfo, SymptomQuery
from .templates import MEDICAL_DISCLAIMER, UNAVAILABLE, lookup

logger = logging.getLogger(__name__)


def resolve_by_rules(text: str) -> CategoryResponse:
    category = match(text)
    if logger.isEnabledFor(logging.DEBUG):
        hits = [c.value for c in matching_categories(text)]
        logger.debug("Rule hits %s, selected %s", hits, category.value if category else None)
    return lookup(category)


class ResponseResolver:
    def __init__(self, classifier: Optional[ExternalClassifier] = None, timeout: float = 20.0):
        self.classifier = classifier
        self.timeout = timeout

    @property
    def mode(self) -> str:
        if self.classifier is None:
            return "rules"
        return getattr(self.classifier, "name", type(self.classifier).__name__)

    async def resolve(self, query: SymptomQuery) -> AnalysisResult:
        if self.classifier is None:
            payload = resolve_by_rules(query.symptoms)
        else:
            payload = await self._classify(query)

        return AnalysisResult(
            conditions=payload.conditions,
            red_flags=payload.red_flags,
            general_advice=payload.general_advice,
            when_to_seek_help=payload.when_to_seek_help,
            disclaimer=MEDICAL_DISCLAIMER,
            timestamp=datetime.now(timezone.utc).isoformat(),
            query_info=QueryInfo(symptoms=query.symptoms, age=query.age, gender=query.gender),
        )

    async def _classify(self, query: SymptomQuery) -> CategoryResponse:
        prompt = build_prompt(query)
        try:
            result = await asyncio.wait_for(self.classifier.classify(prompt), timeout=self.timeout)
            return CategoryResponse.model_validate(result)
        except ClassificationError as e:
            logger.warning("Classifier failed, returning unavailable template: %s", e)
        except asyncio.TimeoutError:
            logger.warning("Classifier timed out after %.1fs, returning unavailable template", self.timeout)
        except Exception:
            logger.exception("Unexpected classifier error, returning unavailable template")
        return UNAVAILABLE
