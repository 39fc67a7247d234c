from sqlmodel import SQLModel, Field as SQLField, Column, JSON
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal, Dict, Tuple
from datetime import datetime, timezone

Gender = Literal['male', 'female', 'other', 'unspecified']
Urgency = Literal['low', 'medium', 'high']

# -----------------------------
# DATABASE TABLE
# -----------------------------
class SymptomQueryRecord(SQLModel, table=True):
    """Store past symptom queries + the response that was returned."""
    __tablename__ = "symptom_queries"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    symptoms: str
    age: Optional[int] = None
    gender: Optional[str] = None
    response: Optional[Dict] = SQLField(default=None, sa_column=Column(JSON))
    timestamp: datetime = SQLField(default_factory=lambda: datetime.now(timezone.utc), index=True)

# -----------------------------
# CORE MODELS
# -----------------------------
class SymptomQuery(BaseModel):
    """One validated request. Symptom text is already trimmed."""
    model_config = ConfigDict(frozen=True)

    symptoms: str = Field(min_length=3)
    age: Optional[int] = Field(default=None, ge=0, le=120)
    gender: Optional[Gender] = None

class ConditionEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    probability: str
    description: str
    next_steps: Tuple[str, ...]
    urgency: Urgency

class CategoryResponse(BaseModel):
    """Conditions, warnings and advice for one category (or a classifier answer)."""
    model_config = ConfigDict(frozen=True)

    conditions: Tuple[ConditionEntry, ...] = Field(min_length=1)
    red_flags: Tuple[str, ...] = ()
    general_advice: str = ""
    when_to_seek_help: str = ""

class QueryInfo(BaseModel):
    symptoms: str
    age: Optional[int] = None
    gender: Optional[str] = None

class AnalysisResult(CategoryResponse):
    disclaimer: str
    timestamp: str
    query_info: QueryInfo

# -----------------------------
# API SCHEMAS
# -----------------------------
class AnalyzeRequest(BaseModel):
    symptoms: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=120)
    gender: Optional[Gender] = None

class HistoryEntry(BaseModel):
    symptoms: str
    age: Optional[int] = None
    gender: Optional[str] = None
    timestamp: str

class HistoryResponse(BaseModel):
    recent_queries: List[HistoryEntry]
    total_returned: int
    disclaimer: str
