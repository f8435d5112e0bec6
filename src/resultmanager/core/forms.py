from abc import ABC, abstractmethod
import re
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar

from resultmanager.core.entities import Entity, EntityId, Result, Section, Student, same_id
from resultmanager.core.grades import MAX_MARKS, MIN_MARKS, derive_grade


E = TypeVar("E", bound=Entity)

WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")


class FormValidationError(ValueError):
    pass


def parse_whole_number(raw: str) -> int:
    value = raw.strip()
    # ASCII digits only; int() would also take "8_5" or non-Latin digits.
    if not WHOLE_NUMBER.fullmatch(value):
        raise ValueError(f"Not a whole number: {raw!r}")
    return int(value)


def coerce_id(raw: str) -> EntityId:
    value = raw.strip()
    if re.fullmatch(r"[0-9]+", value):
        return int(value)
    return value


class EntityForm(ABC, Generic[E]):
    """Draft field state for one entity plus validate-then-emit on submit.

    The form never talks to the network. An invalid submit records the message
    in ``error`` and leaves ``on_submit`` uncalled.
    """

    model: type

    def __init__(self, on_submit: Callable[[E], None], initial: Optional[E] = None) -> None:
        self.on_submit = on_submit
        self.initial = initial
        self.error = ""

    @property
    def is_edit(self) -> bool:
        return self.initial is not None

    @property
    def submit_label(self) -> str:
        return "Update" if self.is_edit else "Create"

    @abstractmethod
    def validate(self) -> E:
        ...

    def submit(self) -> bool:
        try:
            entity = self.validate()
        except FormValidationError as exc:
            self.error = str(exc)
            return False
        self.error = ""
        self.on_submit(entity)
        return True

    def _build(self, fields: Dict[str, Any]) -> E:
        # Edits carry the identity and any server-side extras through unchanged.
        if self.initial is not None:
            return self.initial.model_copy(update=fields)
        return self.model(**fields)


class StudentForm(EntityForm[Student]):
    model = Student

    def __init__(self, on_submit: Callable[[Student], None], initial: Optional[Student] = None) -> None:
        super().__init__(on_submit, initial)
        self.name = initial.name if initial else ""
        self.email = initial.email if initial else ""
        self.section = (initial.section or "") if initial else ""
        self.enrollment_date = (initial.enrollment_date or "") if initial else ""

    def validate(self) -> Student:
        if not self.name.strip() or not self.email.strip():
            raise FormValidationError("Name and Email are required")
        return self._build(
            {
                "name": self.name.strip(),
                "email": self.email.strip(),
                "section": self.section.strip(),
                "enrollment_date": self.enrollment_date.strip(),
            }
        )


class SectionForm(EntityForm[Section]):
    model = Section

    def __init__(self, on_submit: Callable[[Section], None], initial: Optional[Section] = None) -> None:
        super().__init__(on_submit, initial)
        self.name = initial.name if initial else ""
        self.description = (initial.description or "") if initial else ""

    def validate(self) -> Section:
        if not self.name.strip():
            raise FormValidationError("Name is required")
        return self._build({"name": self.name.strip(), "description": self.description.strip()})


class ResultForm(EntityForm[Result]):
    model = Result

    def __init__(
        self,
        on_submit: Callable[[Result], None],
        students: Sequence[Student] = (),
        initial: Optional[Result] = None,
    ) -> None:
        super().__init__(on_submit, initial)
        self.students = list(students)
        self.student_id = str(initial.student_id) if initial and initial.student_id is not None else ""
        self.subject = initial.subject if initial else ""
        self.marks = str(initial.marks) if initial and initial.marks is not None else ""
        self.exam_date = (initial.exam_date or "") if initial else ""

    @property
    def student_options(self) -> List[Tuple[str, str]]:
        return [(str(student.id), student.name) for student in self.students if student.id is not None]

    @property
    def derived_grade(self) -> Optional[str]:
        try:
            return derive_grade(parse_whole_number(self.marks))
        except ValueError:
            return None

    def _selected_student_id(self) -> EntityId:
        for student in self.students:
            if same_id(student.id, self.student_id):
                return student.id
        return coerce_id(self.student_id)

    def validate(self) -> Result:
        if not self.student_id.strip() or not self.subject.strip():
            raise FormValidationError("Student and Subject are required")
        if not self.marks.strip():
            raise FormValidationError("Marks are required")
        try:
            marks = parse_whole_number(self.marks)
        except ValueError as exc:
            raise FormValidationError(f"Marks must be a whole number between {MIN_MARKS} and {MAX_MARKS}") from exc
        if marks < MIN_MARKS or marks > MAX_MARKS:
            raise FormValidationError(f"Marks must be between {MIN_MARKS} and {MAX_MARKS}")

        return self._build(
            {
                "student_id": self._selected_student_id(),
                "subject": self.subject.strip(),
                "marks": marks,
                "grade": derive_grade(marks),
                "exam_date": self.exam_date.strip(),
            }
        )
