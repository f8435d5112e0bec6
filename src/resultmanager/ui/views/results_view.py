from typing import Optional
import flet as ft

from resultmanager.core.derived import distinct_student_ids, distinct_subjects, student_name
from resultmanager.core.grades import grade_color
from resultmanager.state.app_state import Collection, ModalKind
from resultmanager.state.controller import ResultManagerController
from resultmanager.ui.views.common import dash, data_table, row_actions, section_header


ALL_KEY = "__all__"


def _grade_badge(grade: Optional[str]) -> ft.Container:
    return ft.Container(
        content=ft.Text(dash(grade), color=ft.Colors.WHITE if grade_color(grade) else None),
        bgcolor=grade_color(grade),
        padding=ft.padding.symmetric(horizontal=8, vertical=2),
        border_radius=10,
    )


def _filter_value(raw: Optional[str]) -> str:
    if not raw or raw == ALL_KEY:
        return ""
    return raw


def build_results_view(controller: ResultManagerController) -> ft.Control:
    state = controller.state

    student_filter = ft.Dropdown(
        label="Filter by Student",
        width=240,
        value=state.student_filter or ALL_KEY,
        options=[ft.dropdown.Option(ALL_KEY, "All Students")]
        + [
            ft.dropdown.Option(str(sid), student_name(state.students, sid))
            for sid in distinct_student_ids(state.results)
        ],
        on_change=lambda e: controller.set_filters(student_filter=_filter_value(e.control.value)),
    )
    subject_filter = ft.Dropdown(
        label="Filter by Subject",
        width=240,
        value=state.subject_filter or ALL_KEY,
        options=[ft.dropdown.Option(ALL_KEY, "All Subjects")]
        + [ft.dropdown.Option(subject, subject) for subject in distinct_subjects(state.results)],
        on_change=lambda e: controller.set_filters(subject_filter=_filter_value(e.control.value)),
    )

    rows = []
    for result in controller.filtered_results():
        rows.append(
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(student_name(state.students, result.student_id))),
                    ft.DataCell(ft.Text(result.subject)),
                    ft.DataCell(ft.Text(dash(result.marks))),
                    ft.DataCell(_grade_badge(result.grade)),
                    ft.DataCell(ft.Text(dash(result.exam_date))),
                    row_actions(
                        ft.TextButton(
                            "Edit",
                            on_click=lambda _, r=result: controller.open_modal(ModalKind.RESULT, r),
                        ),
                        ft.TextButton(
                            "Delete",
                            style=ft.ButtonStyle(color=ft.Colors.RED_400),
                            on_click=lambda _, rid=result.id: controller.delete(Collection.RESULTS, rid),
                        ),
                    ),
                ]
            )
        )

    return ft.Column(
        controls=[
            section_header(
                "Result Management",
                "Load Results",
                "Add New Result",
                state.is_loading(Collection.RESULTS),
                on_load=lambda: controller.load(Collection.RESULTS),
                on_add=lambda: controller.open_modal(ModalKind.RESULT),
            ),
            ft.Row(controls=[student_filter, subject_filter], spacing=12),
            data_table(
                ["Student Name", "Subject", "Marks", "Grade", "Exam Date", "Actions"],
                rows,
                'No results found. Click "Load Results" or add a new one.',
            ),
        ]
    )
