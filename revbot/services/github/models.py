from typing import Literal

from pydantic import BaseModel, Field

CheckConclusion = Literal["success", "neutral", "failure"]


class ReviewComment(BaseModel):
    """A review comment to post on a PR."""

    path: str
    line: int
    body: str
    side: Literal["LEFT", "RIGHT"] = "RIGHT"


class Review(BaseModel):
    """A complete review to submit."""

    body: str = ""
    event: Literal["APPROVE", "REQUEST_CHANGES", "COMMENT"] = "COMMENT"
    comments: list[ReviewComment] = Field(default_factory=list)


class CheckRunOutput(BaseModel):
    """Payload for completing a check run."""

    status: Literal["completed"] = "completed"
    conclusion: CheckConclusion
    title: str
    summary: str
