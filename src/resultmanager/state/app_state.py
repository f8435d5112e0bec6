from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from resultmanager.core.entities import Entity, EntityId, Result, Section, Student, same_id


class Collection(str, Enum):
    STUDENTS = "students"
    SECTIONS = "sections"
    RESULTS = "results"


class ModalKind(str, Enum):
    STUDENT = "student"
    SECTION = "section"
    RESULT = "result"
    DETAILS = "details"


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Modal:
    kind: ModalKind
    item: Optional[Entity] = None

    @property
    def title(self) -> str:
        if self.kind is ModalKind.DETAILS:
            return "Student Details"
        noun = self.kind.value.capitalize()
        return f"Edit {noun}" if self.item is not None else f"Add New {noun}"


@dataclass(frozen=True)
class Notification:
    severity: Severity
    message: str


@dataclass
class AppState:
    """Last-known snapshot of the three collections plus UI state.

    Collections only change on a successful Load (full replace) or on the
    local patch applied after a successful create/update/delete.
    """

    students: List[Student] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    results: List[Result] = field(default_factory=list)
    loading: Dict[Collection, bool] = field(default_factory=lambda: {c: False for c in Collection})
    active_tab: Collection = Collection.STUDENTS
    modal: Optional[Modal] = None
    notification: Optional[Notification] = None
    student_filter: str = ""
    subject_filter: str = ""
    submitting: bool = False

    def items(self, collection: Collection) -> List:
        return getattr(self, collection.value)

    def replace_all(self, collection: Collection, entities: List[Entity]) -> None:
        setattr(self, collection.value, list(entities))

    def replace(self, collection: Collection, entity: Entity) -> bool:
        items = self.items(collection)
        for index, existing in enumerate(items):
            if same_id(existing.id, entity.id):
                items[index] = entity
                return True
        return False

    def upsert(self, collection: Collection, entity: Entity) -> None:
        if not self.replace(collection, entity):
            self.items(collection).append(entity)

    def remove(self, collection: Collection, entity_id: EntityId) -> None:
        setattr(
            self,
            collection.value,
            [item for item in self.items(collection) if not same_id(item.id, entity_id)],
        )

    def is_loading(self, collection: Collection) -> bool:
        return self.loading.get(collection, False)
