import logging
import threading
from typing import Callable, Dict, List, Mapping, Optional, Protocol, Set, Tuple

from resultmanager.core.derived import filter_results
from resultmanager.core.entities import Entity, EntityId, Result, Section, Student
from resultmanager.services.resource_client import RequestFailure, ResourceClient
from resultmanager.state.app_state import (
    AppState,
    Collection,
    Modal,
    ModalKind,
    Notification,
    Severity,
)


logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this item?"

COLLECTION_BY_MODEL: Dict[type, Collection] = {
    Student: Collection.STUDENTS,
    Section: Collection.SECTIONS,
    Result: Collection.RESULTS,
}

NOUNS: Dict[Collection, str] = {
    Collection.STUDENTS: "student",
    Collection.SECTIONS: "section",
    Collection.RESULTS: "result",
}


class Confirmer(Protocol):
    def confirm(self, message: str, on_confirm: Callable[[], None]) -> None:
        ...


class BlockingConfirmer:
    """Confirmation port for environments where asking is a blocking call."""

    def __init__(self, ask: Callable[[str], bool]) -> None:
        self.ask = ask

    def confirm(self, message: str, on_confirm: Callable[[], None]) -> None:
        if self.ask(message):
            on_confirm()


class ResultManagerController:
    """
    Orchestrates the Resource Clients and the view state.

    Every RequestFailure is caught here and turned into an error notification;
    nothing propagates to the views. ``on_change`` is invoked whenever the
    state has been mutated and the views should re-render.
    """

    def __init__(
        self,
        clients: Mapping[Collection, ResourceClient],
        confirmer: Confirmer,
        state: Optional[AppState] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.clients = dict(clients)
        self.confirmer = confirmer
        self.state = state or AppState()
        self.on_change = on_change
        self._pending_deletes: Set[Tuple[Collection, str]] = set()
        # Guards in-flight flags and collection patches; never held across a request.
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        confirmer: Confirmer,
        on_change: Optional[Callable[[], None]] = None,
    ) -> "ResultManagerController":
        clients = {collection: ResourceClient.from_settings(collection.value) for collection in Collection}
        return cls(clients, confirmer, on_change=on_change)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def _notify(self, severity: Severity, message: str) -> None:
        if severity is Severity.ERROR:
            logger.info("Error notification: %s", message)
        self.state.notification = Notification(severity, message)

    # ---------- UI state ----------

    def set_tab(self, collection: Collection) -> None:
        self.state.active_tab = collection
        self._changed()

    def open_modal(self, kind: ModalKind, item: Optional[Entity] = None) -> None:
        self.state.modal = Modal(kind, item)
        self._changed()

    def view_details(self, student: Student) -> None:
        self.open_modal(ModalKind.DETAILS, student)

    def close_modal(self) -> None:
        self.state.modal = None
        self._changed()

    def dismiss_notification(self) -> None:
        self.state.notification = None
        self._changed()

    def set_filters(self, student_filter: Optional[str] = None, subject_filter: Optional[str] = None) -> None:
        if student_filter is not None:
            self.state.student_filter = student_filter
        if subject_filter is not None:
            self.state.subject_filter = subject_filter
        self._changed()

    def filtered_results(self) -> List[Result]:
        return filter_results(self.state.results, self.state.student_filter, self.state.subject_filter)

    # ---------- server operations ----------

    def load(self, collection: Collection) -> None:
        with self._lock:
            busy = self.state.is_loading(collection)
            if not busy:
                self.state.loading[collection] = True
        if busy:
            logger.debug("Load of %s already in flight; ignoring", collection.value)
            return

        self._changed()
        try:
            entities = self.clients[collection].list()
            with self._lock:
                self.state.replace_all(collection, entities)
        except RequestFailure as exc:
            self._notify(Severity.ERROR, str(exc) or f"Failed to load {collection.value}")
        finally:
            self.state.loading[collection] = False
            self._changed()

    def submit(self, entity: Entity) -> None:
        with self._lock:
            busy = self.state.submitting
            self.state.submitting = True
        if busy:
            logger.debug("Submit already in flight; ignoring")
            return

        collection = COLLECTION_BY_MODEL[type(entity)]
        noun = NOUNS[collection]
        client = self.clients[collection]

        try:
            if entity.id is not None and entity.id != "":
                updated = client.update(entity.id, entity)
                with self._lock:
                    self.state.replace(collection, updated)
                message = f"{noun.capitalize()} updated successfully."
            else:
                created = client.create(entity)
                with self._lock:
                    self.state.upsert(collection, created)
                message = f"{noun.capitalize()} created successfully."
        except RequestFailure as exc:
            self._notify(Severity.ERROR, str(exc) or f"Failed to save {noun}")
            self._changed()
            return
        finally:
            self.state.submitting = False

        self.state.modal = None
        self._notify(Severity.SUCCESS, message)
        self._changed()

    def delete(self, collection: Collection, entity_id: EntityId) -> None:
        self.confirmer.confirm(DELETE_PROMPT, lambda: self._delete_confirmed(collection, entity_id))

    def _delete_confirmed(self, collection: Collection, entity_id: EntityId) -> None:
        key = (collection, str(entity_id))
        with self._lock:
            busy = key in self._pending_deletes
            self._pending_deletes.add(key)
        if busy:
            logger.debug("Delete of %s/%s already in flight; ignoring", collection.value, entity_id)
            return

        try:
            self.clients[collection].delete(entity_id)
        except RequestFailure as exc:
            self._notify(Severity.ERROR, str(exc) or "Failed to delete item")
        else:
            with self._lock:
                self.state.remove(collection, entity_id)
            self._notify(Severity.SUCCESS, f"{NOUNS[collection].capitalize()} deleted successfully.")
        finally:
            with self._lock:
                self._pending_deletes.discard(key)
            self._changed()
