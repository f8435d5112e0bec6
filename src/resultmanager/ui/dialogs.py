from typing import Callable, Dict, List, Optional
import flet as ft

from resultmanager.core.entities import Result, Section, Student
from resultmanager.core.forms import EntityForm, ResultForm, SectionForm, StudentForm
from resultmanager.state.app_state import Modal, ModalKind
from resultmanager.state.controller import ResultManagerController
from resultmanager.ui.views.common import dash


class FletConfirmer:
    """Confirmation port backed by a non-blocking Flet dialog."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page

    def confirm(self, message: str, on_confirm: Callable[[], None]) -> None:
        dialog = ft.AlertDialog(modal=True, title=ft.Text("Confirm"), content=ft.Text(message))

        def on_yes(_):
            self.page.close(dialog)
            on_confirm()

        dialog.actions = [
            ft.TextButton("Cancel", on_click=lambda _: self.page.close(dialog)),
            ft.TextButton("Delete", style=ft.ButtonStyle(color=ft.Colors.RED_400), on_click=on_yes),
        ]
        self.page.open(dialog)


def _form_body(
    form: EntityForm,
    fields: Dict[str, ft.Control],
    extra: List[ft.Control],
    on_cancel: Callable[[], None],
) -> List[ft.Control]:
    error = ft.Text(color=ft.Colors.RED_400)

    def on_submit(_):
        for attr, control in fields.items():
            setattr(form, attr, control.value or "")
        if not form.submit():
            error.value = form.error
            error.update()

    return [
        ft.Column(controls=[*fields.values(), *extra, error], tight=True, spacing=12, width=420),
        ft.Row(
            controls=[
                ft.TextButton("Cancel", on_click=lambda _: on_cancel()),
                ft.Button(form.submit_label, on_click=on_submit),
            ],
            alignment=ft.MainAxisAlignment.END,
        ),
    ]


def _student_body(controller: ResultManagerController, item: Optional[Student]) -> List[ft.Control]:
    form = StudentForm(controller.submit, initial=item)
    fields = {
        "name": ft.TextField(label="Name *", value=form.name),
        "email": ft.TextField(label="Email *", value=form.email, keyboard_type=ft.KeyboardType.EMAIL),
        "section": ft.TextField(label="Section", value=form.section),
        "enrollment_date": ft.TextField(label="Enrollment Date", hint_text="YYYY-MM-DD", value=form.enrollment_date),
    }
    return _form_body(form, fields, [], controller.close_modal)


def _section_body(controller: ResultManagerController, item: Optional[Section]) -> List[ft.Control]:
    form = SectionForm(controller.submit, initial=item)
    fields = {
        "name": ft.TextField(label="Name *", value=form.name),
        "description": ft.TextField(label="Description", value=form.description, multiline=True, min_lines=2),
    }
    return _form_body(form, fields, [], controller.close_modal)


def _result_body(controller: ResultManagerController, item: Optional[Result]) -> List[ft.Control]:
    form = ResultForm(controller.submit, students=controller.state.students, initial=item)
    grade_preview = ft.Text(f"Grade: {dash(form.derived_grade)}")

    def on_marks_change(e):
        form.marks = e.control.value or ""
        grade_preview.value = f"Grade: {dash(form.derived_grade)}"
        grade_preview.update()

    fields = {
        "student_id": ft.Dropdown(
            label="Student *",
            value=form.student_id or None,
            options=[ft.dropdown.Option(key, name) for key, name in form.student_options],
        ),
        "subject": ft.TextField(label="Subject *", value=form.subject),
        "marks": ft.TextField(
            label="Marks (0-100) *",
            value=form.marks,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=on_marks_change,
        ),
        "exam_date": ft.TextField(label="Exam Date", hint_text="YYYY-MM-DD", value=form.exam_date),
    }
    return _form_body(form, fields, [grade_preview], controller.close_modal)


def _details_body(controller: ResultManagerController, student: Student) -> List[ft.Control]:
    rows = [
        ("Name", student.name),
        ("Email", student.email),
        ("Section", student.section),
        ("Enrollment Date", student.enrollment_date),
    ]
    return [
        ft.Column(
            controls=[
                ft.Row(controls=[ft.Text(label, weight=ft.FontWeight.BOLD, width=140), ft.Text(dash(value))])
                for label, value in rows
            ],
            tight=True,
        ),
        ft.Row(
            controls=[ft.Button("Back to List", on_click=lambda _: controller.close_modal())],
            alignment=ft.MainAxisAlignment.END,
        ),
    ]


BODY_BUILDERS = {
    ModalKind.STUDENT: _student_body,
    ModalKind.SECTION: _section_body,
    ModalKind.RESULT: _result_body,
    ModalKind.DETAILS: _details_body,
}


def build_modal_dialog(controller: ResultManagerController, modal: Modal) -> ft.AlertDialog:
    def on_dismiss(_):
        # Only a backdrop dismissal of the modal still on screen closes it.
        if controller.state.modal is modal:
            controller.close_modal()

    body = BODY_BUILDERS[modal.kind](controller, modal.item)
    return ft.AlertDialog(
        modal=False,
        title=ft.Row(
            controls=[
                ft.Text(modal.title, size=20, weight=ft.FontWeight.BOLD),
                ft.IconButton(icon=ft.Icons.CLOSE, on_click=lambda _: controller.close_modal()),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        ),
        content=ft.Column(controls=body, tight=True, scroll=ft.ScrollMode.AUTO),
        on_dismiss=on_dismiss,
    )
