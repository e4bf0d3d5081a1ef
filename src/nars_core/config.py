"""Reasoner configuration."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator


def _env_seed() -> int | None:
    raw = os.environ.get("NARS_SEED", "").strip()
    return int(raw) if raw else None


class BagConfig(BaseModel):
    levels: int = Field(default=100, gt=0)
    threshold: int = Field(default=10, gt=0)
    concept_capacity: int = Field(default=1000, gt=0)
    task_link_capacity: int = Field(default=20, gt=0)
    term_link_capacity: int = Field(default=100, gt=0)
    novel_task_capacity: int = Field(default=10, gt=0)
    concept_forgetting_cycle: int = Field(default=10, gt=0)
    task_link_forgetting_cycle: int = Field(default=20, gt=0)
    term_link_forgetting_cycle: int = Field(default=50, gt=0)
    new_task_forgetting_cycle: int = Field(default=1, gt=0)


class BudgetConfig(BaseModel):
    threshold: float = Field(default=0.01, ge=0.0, le=1.0)
    default_judgment_priority: float = 0.8
    default_judgment_durability: float = 0.8
    default_question_priority: float = 0.9
    default_question_durability: float = 0.9


class TruthConfig(BaseModel):
    default_judgment_frequency: float = 1.0
    default_judgment_confidence: float = 0.9


class ConceptConfig(BaseModel):
    maximum_belief_length: int = Field(default=7, gt=0)
    maximum_questions_length: int = Field(default=5, gt=0)
    term_link_record_length: int = Field(default=10, gt=0)
    max_matched_term_link: int = Field(default=10, gt=0)
    max_reasoned_term_link: int = Field(default=3, gt=0)


class MemoryConfig(BaseModel):
    creation_expectation: float = 0.66
    silent_level: int = Field(default=0, ge=0, le=100)


class StampConfig(BaseModel):
    maximum_length: int = Field(default=8, gt=0)

    @field_validator("maximum_length")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError(f"stamp length must be a power of two, got {value}")
        return value


class Config(BaseModel):
    seed: int | None = Field(default_factory=_env_seed)
    bag: BagConfig = Field(default_factory=BagConfig)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    truth: TruthConfig = Field(default_factory=TruthConfig)
    concept: ConceptConfig = Field(default_factory=ConceptConfig)
    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    stamp: StampConfig = Field(default_factory=StampConfig)

    @property
    def silent_threshold(self) -> float:
        return self.memory.silent_level / 100.0
