from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AppraisalCategory(_CamelModel):
    id: str
    name: str
    description: str = ""
    weight: float = 1.0


class AppraisalRating(_CamelModel):
    category_id: str
    score: float = Field(ge=0, le=5)
    comments: str = ""


class SelfAssessment(_CamelModel):
    category_id: str
    self_score: float = Field(ge=0, le=5)
    self_comments: str = ""
    achievements: str = ""
    challenges: str = ""
    goals: str = ""


class AppraisalTemplate(_CamelModel):
    id: str
    name: str
    description: str = ""
    categories: List[AppraisalCategory] = Field(default_factory=list)

    def category(self, category_id: str) -> Optional[AppraisalCategory]:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None


Gender = Literal["male", "female", "other", "prefer-not-to-say"]


class AppraisalData(_CamelModel):
    employee_name: str
    employee_id: str
    reviewer_name: str
    review_date: str = ""
    employee_gender: Gender = "prefer-not-to-say"
    template: AppraisalTemplate
    ratings: List[AppraisalRating] = Field(default_factory=list)
    self_assessment: Optional[List[SelfAssessment]] = None
    additional_manager_comments: Optional[str] = None
    # weighted score is computed by the form before submission
    overall_score: float = Field(ge=0, le=5)
    generated_feedback: str = ""


class FeedbackResponse(_CamelModel):
    success: bool
    feedback: str
    error: Optional[str] = None
    source: Optional[Literal["llm", "fallback"]] = None
