import flet as ft

from resultmanager.state.app_state import Collection, ModalKind
from resultmanager.state.controller import ResultManagerController
from resultmanager.ui.views.common import dash, data_table, row_actions, section_header


def build_students_view(controller: ResultManagerController) -> ft.Control:
    state = controller.state

    rows = []
    for student in state.students:
        rows.append(
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(student.name)),
                    ft.DataCell(ft.Text(student.email)),
                    ft.DataCell(ft.Text(dash(student.section))),
                    ft.DataCell(ft.Text(dash(student.enrollment_date))),
                    row_actions(
                        ft.TextButton("View", on_click=lambda _, s=student: controller.view_details(s)),
                        ft.TextButton(
                            "Edit",
                            on_click=lambda _, s=student: controller.open_modal(ModalKind.STUDENT, s),
                        ),
                        ft.TextButton(
                            "Delete",
                            style=ft.ButtonStyle(color=ft.Colors.RED_400),
                            on_click=lambda _, sid=student.id: controller.delete(Collection.STUDENTS, sid),
                        ),
                    ),
                ]
            )
        )

    return ft.Column(
        controls=[
            section_header(
                "Student Management",
                "Load Students",
                "Add New Student",
                state.is_loading(Collection.STUDENTS),
                on_load=lambda: controller.load(Collection.STUDENTS),
                on_add=lambda: controller.open_modal(ModalKind.STUDENT),
            ),
            data_table(
                ["Name", "Email", "Section", "Enrollment Date", "Actions"],
                rows,
                'No students found. Click "Load Students" or add a new one.',
            ),
        ]
    )
