from __future__ import annotations

import flet as ft

from resultmanager.state.app_state import Collection, Modal, Severity
from resultmanager.state.controller import ResultManagerController
from resultmanager.ui.dialogs import FletConfirmer, build_modal_dialog
from resultmanager.ui.views.results_view import build_results_view
from resultmanager.ui.views.sections_view import build_sections_view
from resultmanager.ui.views.students_view import build_students_view

TAB_ORDER = [Collection.STUDENTS, Collection.SECTIONS, Collection.RESULTS]

VIEW_BUILDERS = {
    Collection.STUDENTS: build_students_view,
    Collection.SECTIONS: build_sections_view,
    Collection.RESULTS: build_results_view,
}


class ResultManagerApp:
    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.page.title = "Student Result Management System"
        self.page.scroll = ft.ScrollMode.AUTO
        self.controller = ResultManagerController.from_settings(FletConfirmer(page), on_change=self.render)

        self.dialog: ft.AlertDialog | None = None
        self.dialog_modal: Modal | None = None

        self.tabs = ft.Tabs(
            selected_index=0,
            tabs=[ft.Tab(text=collection.value.capitalize()) for collection in TAB_ORDER],
            on_change=self.handle_tab_change,
        )
        self.body = ft.Container(padding=ft.padding.only(top=12))
        self.banner = ft.Container(
            visible=False,
            padding=12,
            border_radius=6,
            margin=ft.margin.only(top=16),
            on_click=lambda _: self.controller.dismiss_notification(),
        )

    def run(self) -> None:
        self.page.add(
            ft.Column(
                [
                    ft.Text("Student Result Management System", size=28, weight=ft.FontWeight.BOLD),
                    ft.Text("Manage students, sections, and academic results"),
                ]
            ),
            self.tabs,
            self.body,
            self.banner,
        )
        self.render()

    def handle_tab_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_tab(TAB_ORDER[int(e.control.selected_index)])

    def render(self) -> None:
        state = self.controller.state
        self.tabs.selected_index = TAB_ORDER.index(state.active_tab)
        self.body.content = VIEW_BUILDERS[state.active_tab](self.controller)
        self.render_notification()
        self.render_modal()
        self.page.update()

    def render_notification(self) -> None:
        notification = self.controller.state.notification
        if notification is None:
            self.banner.visible = False
            return
        self.banner.visible = True
        self.banner.bgcolor = (
            ft.Colors.GREEN_400 if notification.severity is Severity.SUCCESS else ft.Colors.RED_400
        )
        self.banner.content = ft.Text(notification.message, color=ft.Colors.WHITE)

    def render_modal(self) -> None:
        modal = self.controller.state.modal
        # Same descriptor: keep the open dialog so its drafts survive a failed submit.
        if modal is self.dialog_modal:
            return
        if self.dialog is not None:
            self.page.close(self.dialog)
        self.dialog = None
        self.dialog_modal = modal
        if modal is None:
            return
        self.dialog = build_modal_dialog(self.controller, modal)
        self.page.open(self.dialog)


def main(page: ft.Page) -> None:
    ResultManagerApp(page).run()
