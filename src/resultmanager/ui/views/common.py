from typing import Callable, List, Optional
import flet as ft


def dash(value: Optional[object]) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


def section_header(
    title: str,
    load_label: str,
    add_label: str,
    loading: bool,
    on_load: Callable[[], None],
    on_add: Callable[[], None],
) -> ft.Row:
    return ft.Row(
        controls=[
            ft.Text(title, size=22, weight=ft.FontWeight.BOLD),
            ft.Row(
                controls=[
                    ft.OutlinedButton(
                        "Loading..." if loading else load_label,
                        disabled=loading,
                        on_click=lambda _: on_load(),
                    ),
                    ft.Button(add_label, icon=ft.Icons.ADD, on_click=lambda _: on_add()),
                ],
                spacing=8,
            ),
        ],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
    )


def data_table(headers: List[str], rows: List[ft.DataRow], empty_message: str) -> ft.Control:
    table = ft.DataTable(
        columns=[ft.DataColumn(ft.Text(header, weight=ft.FontWeight.BOLD)) for header in headers],
        rows=rows,
    )
    if rows:
        return table
    return ft.Column(
        controls=[
            table,
            ft.Container(
                padding=20,
                content=ft.Text(empty_message, italic=True, color=ft.Colors.GREY_600),
            ),
        ]
    )


def row_actions(*buttons: ft.Control) -> ft.DataCell:
    return ft.DataCell(ft.Row(controls=list(buttons), spacing=4))
