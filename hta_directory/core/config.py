"""Configuration models and YAML loader for the Head TA assignment engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

MAX_HOURS_PER_WEEK = 20
MAX_COURSES_PER_SEMESTER = 3
DEFAULT_HOURS_PER_WEEK = 10


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/hta_directory.db"


class AssignmentLimits(BaseModel):
    """Workload ceilings enforced by the eligibility check."""

    max_hours_per_week: int = Field(default=MAX_HOURS_PER_WEEK, ge=1)
    max_courses_per_semester: int = Field(default=MAX_COURSES_PER_SEMESTER, ge=1)
    default_hours_per_week: int = Field(default=DEFAULT_HOURS_PER_WEEK, ge=0)


class ScoringConfig(BaseModel):
    """Weights for rule-based suggestion scoring."""

    experience_bonus: float = Field(default=30.0, ge=0.0)
    availability_bonus: float = Field(default=20.0, ge=0.0)
    availability_threshold_hours: int = Field(default=10, ge=0)
    seniority_bonus: float = Field(default=20.0, ge=0.0)
    seniority_years: int = Field(default=2, ge=0)
    max_suggestions: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def bonuses_fit_score_range(self) -> "ScoringConfig":
        total = self.experience_bonus + self.availability_bonus + self.seniority_bonus
        if total > 100.0:
            msg = f"scoring bonuses must sum to at most 100, got {total:g}"
            raise ValueError(msg)
        return self


class HoursConfig(BaseModel):
    """Suggested weekly hours, keyed by course number prefix."""

    heavy_course_prefixes: list[str] = Field(default_factory=lambda: ["6"])
    heavy_course_hours: int = Field(default=15, ge=0)
    default_course_hours: int = Field(default=10, ge=0)

    @field_validator("heavy_course_prefixes")
    @classmethod
    def strip_prefixes(cls, v: list[str]) -> list[str]:
        prefixes = [p.strip() for p in v if p.strip()]
        if len(prefixes) != len(v):
            msg = "heavy_course_prefixes must not contain empty entries"
            raise ValueError(msg)
        return prefixes


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    limits: AssignmentLimits = Field(default_factory=AssignmentLimits)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    hours: HoursConfig = Field(default_factory=HoursConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
