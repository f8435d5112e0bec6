from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


EntityId = Union[int, str]


class Entity(BaseModel):
    """Base for records owned by the mock-data service.

    Identity is always assigned by the server; unknown fields sent back by the
    server are preserved so a full-replace update does not drop them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[EntityId] = None

    def to_payload(self, include_id: bool = True) -> Dict[str, Any]:
        exclude = None if include_id else {"id"}
        return self.model_dump(by_alias=True, exclude=exclude)


class Student(Entity):
    name: str = ""
    email: str = ""
    # Free-text label matched against Section.name; not a reference.
    section: Optional[str] = None
    enrollment_date: Optional[str] = Field(default=None, alias="enrollmentDate")

    @field_validator("name", "email", mode="before")
    @classmethod
    def blank_text_if_null(cls, value: Any) -> Any:
        return "" if value is None else value


class Section(Entity):
    name: str = ""
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def blank_text_if_null(cls, value: Any) -> Any:
        return "" if value is None else value


class Result(Entity):
    student_id: Optional[EntityId] = Field(default=None, alias="studentId")
    subject: str = ""
    # Records written by other clients may hold fractional marks.
    marks: Optional[Union[int, float]] = None
    grade: Optional[str] = None
    exam_date: Optional[str] = Field(default=None, alias="examDate")

    @field_validator("subject", mode="before")
    @classmethod
    def blank_text_if_null(cls, value: Any) -> Any:
        return "" if value is None else value


def same_id(left: Optional[EntityId], right: Optional[EntityId]) -> bool:
    if left is None or right is None:
        return False
    return str(left) == str(right)
