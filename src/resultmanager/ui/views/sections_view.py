import flet as ft

from resultmanager.core.derived import section_student_count
from resultmanager.state.app_state import Collection, ModalKind
from resultmanager.state.controller import ResultManagerController
from resultmanager.ui.views.common import dash, data_table, row_actions, section_header


def build_sections_view(controller: ResultManagerController) -> ft.Control:
    state = controller.state

    rows = []
    for section in state.sections:
        rows.append(
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(section.name)),
                    ft.DataCell(ft.Text(dash(section.description))),
                    ft.DataCell(ft.Text(str(section_student_count(state.students, section)))),
                    row_actions(
                        ft.TextButton(
                            "Edit",
                            on_click=lambda _, s=section: controller.open_modal(ModalKind.SECTION, s),
                        ),
                        ft.TextButton(
                            "Delete",
                            style=ft.ButtonStyle(color=ft.Colors.RED_400),
                            on_click=lambda _, sid=section.id: controller.delete(Collection.SECTIONS, sid),
                        ),
                    ),
                ]
            )
        )

    return ft.Column(
        controls=[
            section_header(
                "Section Management",
                "Load Sections",
                "Add New Section",
                state.is_loading(Collection.SECTIONS),
                on_load=lambda: controller.load(Collection.SECTIONS),
                on_add=lambda: controller.open_modal(ModalKind.SECTION),
            ),
            data_table(
                ["Name", "Description", "Total Students", "Actions"],
                rows,
                'No sections found. Click "Load Sections" or add a new one.',
            ),
        ]
    )
