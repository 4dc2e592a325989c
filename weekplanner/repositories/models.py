"""
MongoDB document models using Pydantic.
These are also the request models both API surfaces validate against.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

# Task fields that may be explicitly set to null on update
NULLABLE_TASK_FIELDS = frozenset({"file"})

# Lax coercion: numbers are accepted for string fields, numeric strings for
# int fields, and unknown keys are dropped.
_LAX = ConfigDict(coerce_numbers_to_str=True, extra="ignore")


def _document_to_data(document: Mapping[str, Any]) -> Dict[str, Any]:
    data = dict(document)
    if "_id" in data:
        data["id"] = str(data.pop("_id"))
    return data


class WeekFields(BaseModel):
    """The six caller-supplied Week fields. All required."""

    model_config = ConfigDict(
        **_LAX,
        json_schema_extra={
            "examples": [
                {
                    "year": 2024,
                    "numweek": 10,
                    "color": "#ffcc00",
                    "description": "Sprint review week",
                    "priority": 1,
                    "link": "https://example.com/w10",
                }
            ]
        },
    )

    year: int = Field(..., description="Calendar year")
    numweek: int = Field(..., description="Week of year")
    color: str = Field(..., description="Display colour")
    description: str = Field(..., description="Free text")
    priority: int = Field(..., description="Ordering hint")
    link: str = Field(..., description="URL or reference")


class WeekCreate(WeekFields):
    """Payload for createWeek and for the full-replace updateWeek."""


class WeekModel(WeekFields):
    """Week as stored; `id` is the store-assigned ObjectId as hex."""

    id: str = Field(..., description="Store-assigned identifier")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "WeekModel":
        return cls.model_validate(_document_to_data(document))


class TaskFields(BaseModel):
    """Caller-supplied Task fields. Everything but `file` is required."""

    model_config = ConfigDict(
        **_LAX,
        json_schema_extra={
            "examples": [
                {
                    "yearweek": "2024-W10",
                    "dayofweek": "Mon",
                    "name": "A",
                    "description": "",
                    "color": "#fff",
                    "time_start": "09:00",
                    "time_end": "10:00",
                    "finished": 0,
                    "priority": 1,
                }
            ]
        },
    )

    yearweek: str = Field(..., description="Soft reference to a Week")
    dayofweek: str = Field(..., description="Day label")
    name: str
    description: str
    color: str
    time_start: str = Field(..., description="Start time, not validated")
    time_end: str = Field(..., description="End time, not validated")
    finished: int = Field(..., description="0/1 completion flag")
    priority: int
    file: Optional[str] = Field(default=None, description="Stored attachment filename")


class TaskCreate(TaskFields):
    """Payload for createTask."""


class TaskModel(TaskFields):
    """Task as stored."""

    id: str = Field(..., description="Store-assigned identifier")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "TaskModel":
        return cls.model_validate(_document_to_data(document))


class TaskUpdate(BaseModel):
    """
    Partial Task update. Only the keys the caller actually sent are applied;
    `file` may be sent as null to clear the attachment.
    """

    model_config = ConfigDict(
        **_LAX,
        json_schema_extra={"examples": [{"name": "Renamed task", "finished": 1}]},
    )

    yearweek: Optional[str] = None
    dayofweek: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None
    finished: Optional[int] = None
    priority: Optional[int] = None
    file: Optional[str] = None

    @model_validator(mode="after")
    def _reject_nulls(self) -> "TaskUpdate":
        nulled = sorted(
            name
            for name in self.model_fields_set
            if getattr(self, name) is None and name not in NULLABLE_TASK_FIELDS
        )
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self

    def changes(self) -> Dict[str, Any]:
        """The supplied fields, ready for a $set."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class TaskBulkUpdate(TaskUpdate):
    """Body of `PUT /tasks`: a partial update that names its target in the payload."""

    model_config = ConfigDict(
        **_LAX,
        json_schema_extra={"examples": [{"id": "65f1c0ffee0000000000abcd", "finished": 1}]},
    )

    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        description="Identifier of the task to update",
    )
