"""
Entity model for Idea Diary.

Entities are frozen pydantic models. Python attributes are snake_case;
the persisted and exported documents use the camelCase aliases.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Closed category taxonomy. Only these 4 exist."""

    WORK = "work"
    PRIVATE = "private"
    IDEA = "idea"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label, also matched by search."""
        return CATEGORY_LABELS[self]

    @property
    def search_labels(self) -> tuple[str, str]:
        """Display label plus the browser app's label for the same category."""
        return CATEGORY_LABELS[self], BROWSER_LABELS[self]


CATEGORY_LABELS: dict[Category, str] = {
    Category.WORK: "Work",
    Category.PRIVATE: "Private",
    Category.IDEA: "Idea",
    Category.OTHER: "Other",
}

# Labels shown by the browser version, still matched by search
BROWSER_LABELS: dict[Category, str] = {
    Category.WORK: "仕事",
    Category.PRIVATE: "プライベート",
    Category.IDEA: "アイデア",
    Category.OTHER: "その他",
}


class _Entity(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Idea(_Entity):
    """A captured thought with an optional plan and result."""

    id: str
    text: str
    category: Category
    created_at: datetime
    executed: bool = False
    executed_at: datetime | None = None
    method: str = ""
    outcome: str = ""

    @model_validator(mode="after")
    def _check_executed(self) -> "Idea":
        if self.executed != (self.executed_at is not None):
            raise ValueError("executed must be true exactly when executedAt is set")
        return self


class LogEntry(_Entity):
    """A free-form cause/effect journal record."""

    id: str
    method: str = ""
    outcome: str = ""
    created_at: datetime


class Snapshot(BaseModel):
    """The complete serializable state at a point in time."""

    ideas: list[Idea] = Field(default_factory=list)
    logs: list[LogEntry] = Field(default_factory=list)
