import logging
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError
import requests
from requests import RequestException

from resultmanager.config.settings import settings
from resultmanager.core.entities import Entity, EntityId, Result, Section, Student


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

# resource name -> (settings attribute holding its path, model, singular noun)
RESOURCES: Dict[str, Tuple[str, Type[Entity], str]] = {
    "students": ("students_path", Student, "student"),
    "sections": ("sections_path", Section, "section"),
    "results": ("results_path", Result, "result"),
}


class RequestFailure(Exception):
    pass


class ResourceClient(Generic[E]):
    """list/create/update/delete against one collection of the mock-data service.

    Every call is a single attempt. Transport errors, non-2xx statuses and
    unreadable bodies all surface as RequestFailure.
    """

    def __init__(
        self,
        base_url: str,
        path: str,
        model: Type[E],
        noun: str,
        timeout: float = 15.0,
    ) -> None:
        if not base_url:
            raise RequestFailure("Missing RESULTMANAGER_API_URL in environment")
        self.url = f"{base_url.rstrip('/')}/{path.strip('/')}"
        self.model = model
        self.noun = noun
        self.timeout = timeout

    @classmethod
    def from_settings(cls, resource: str) -> "ResourceClient":
        try:
            path_attr, model, noun = RESOURCES[resource]
        except KeyError as exc:
            raise ValueError(f"Unknown resource: {resource}") from exc
        return cls(
            settings.api_url,
            getattr(settings, path_attr),
            model,
            noun,
            timeout=settings.request_timeout,
        )

    @property
    def plural(self) -> str:
        return f"{self.noun}s"

    def list(self) -> List[E]:
        action = f"load {self.plural}"
        data = self._json(self._send("GET", self.url, action), action)
        if not isinstance(data, list):
            raise RequestFailure(f"Failed to {action}: expected a list")
        entities: List[E] = []
        for item in data:
            try:
                entities.append(self.model.model_validate(item))
            except ValidationError as exc:
                # One unreadable record must not hide the rest of the collection.
                logger.warning("Skipping unreadable %s record %r: %s", self.noun, item, exc)
        return entities

    def create(self, entity: E) -> E:
        action = f"add {self.noun}"
        response = self._send("POST", self.url, action, entity.to_payload(include_id=False))
        return self._to_model(self._json(response, action), action)

    def update(self, entity_id: EntityId, entity: E) -> E:
        action = f"update {self.noun}"
        payload = entity.to_payload(include_id=True)
        payload["id"] = entity_id
        response = self._send("PUT", self._item_url(entity_id), action, payload)
        return self._to_model(self._json(response, action), action)

    def delete(self, entity_id: EntityId) -> bool:
        self._send("DELETE", self._item_url(entity_id), f"delete {self.noun}")
        return True

    def _item_url(self, entity_id: EntityId) -> str:
        return f"{self.url}/{entity_id}"

    def _send(
        self,
        method: str,
        url: str,
        action: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        logger.debug("%s %s", method, url)
        try:
            res = requests.request(method, url, json=payload, timeout=self.timeout)
        except RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise RequestFailure(str(exc)) from exc

        if not 200 <= res.status_code < 300:
            logger.warning("%s %s returned HTTP %s", method, url, res.status_code)
            raise RequestFailure(f"Failed to {action} (HTTP {res.status_code})")
        return res

    @staticmethod
    def _json(res: requests.Response, action: str) -> Any:
        try:
            return res.json()
        except ValueError as exc:
            raise RequestFailure(f"Failed to {action}: response was not JSON") from exc

    def _to_model(self, data: Any, action: str) -> E:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            raise RequestFailure(f"Failed to {action}: unexpected {self.noun} data") from exc
