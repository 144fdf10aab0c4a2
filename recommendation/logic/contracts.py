"""
Data Contracts for the Specialization Recommendation Engine

Defines Pydantic models for StudentProfile (input), TrackScore (heuristic
output) and Recommendation / AdvisorResult (merged output).
Attributes are snake_case; the wire and storage format is camelCase.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, StrictBool, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from .constants import (
    AcademicYear,
    Semester,
    ALStream,
    Subject,
    Excitement,
    WorkStyle,
    Level,
    CareerGoal,
    LearningEase,
    MAX_ADDITIONAL_CHARS,
)


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        use_enum_values = True
        validate_default = True


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class StudentProfile(CamelModel):
    """
    Self-reported profile submitted by a student.
    Every enum field must come from its fixed vocabulary.
    """
    # Academic
    current_year: AcademicYear
    current_semester: Semester
    cgpa: Optional[float] = Field(default=None, ge=0, le=4)
    al_stream: ALStream = ALStream.NONE
    has_physics_and_combined_maths: StrictBool

    # Interests
    subjects: List[Subject] = Field(..., min_length=1)
    excitement: Excitement

    # Self-rated skills (1-5), JSON numbers only
    programming_skill: StrictInt = Field(..., ge=1, le=5)
    math_skill: StrictInt = Field(..., ge=1, le=5)
    cyber_skill: StrictInt = Field(..., ge=1, le=5)
    uiux_skill: StrictInt = Field(..., ge=1, le=5)
    research_skill: StrictInt = Field(..., ge=1, le=5)
    motivation: StrictInt = Field(..., ge=1, le=5)
    languages: List[str] = Field(default_factory=list)

    # Working preferences
    work_style: WorkStyle
    debug_patience: Level
    hardware_interest: Level
    design_creativity: Level
    data_handling_comfort: Level
    security_mindset: Level
    wants_research_path: StrictBool

    # Careers
    career_goals: List[CareerGoal] = Field(..., min_length=1)

    # Meta
    additional: str = Field(default="", max_length=MAX_ADDITIONAL_CHARS)
    consent_to_share_with_experts: StrictBool

    @field_validator("current_year", "current_semester", mode="before")
    @classmethod
    def _choice_as_string(cls, value):
        # Forms send the year/semester either as "2" or 2
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("cgpa", mode="before")
    @classmethod
    def _blank_cgpa(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                return None
            try:
                return float(value)
            except ValueError:
                raise ValueError("Invalid CGPA.")
        return value


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class TrackScore(CamelModel):
    """Heuristic match for one track, normalized to 0-100."""
    track: str
    percentage: int = Field(ge=0, le=100)


class Recommendation(CamelModel):
    """
    Single ranked specialization recommendation.
    `percentage` is the canonical name; storage maps it to `score`.
    """
    track: str
    percentage: int = Field(ge=0, le=100)
    reason: str = ""
    roles: List[str] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    develop_next: List[str] = Field(default_factory=list)
    learning_ease: LearningEase = LearningEase.MODERATE
    future_scope: str = ""
    opportunities: str = ""


class AdvisorResult(CamelModel):
    """Merged outcome of the heuristic ranking and the AI advisor."""
    recommendations: List[Recommendation] = Field(default_factory=list)
    suggested_expert_tags: List[str] = Field(default_factory=list)
    summary: str = ""
    source: str
    model: str
