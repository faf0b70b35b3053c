from typing import Generic, List, Optional, Type

import requests
from loguru import logger

from crudstore.exceptions import CrudClientError
from crudstore.store import RecordT


class CrudClient(Generic[RecordT]):
    """
    Talks to a resource served by the dispatcher.

    Missing records come back as None / False; any other failure status
    raises CrudClientError.
    """

    def __init__(
        self,
        base_url: str,
        model: Type[RecordT],
        path: str = "/item",
        session: Optional[requests.Session] = None,
        timeout: float = 5.0,
    ):
        self.url = base_url.rstrip("/") + path
        self.model = model
        self.session = session or requests.Session()
        self.timeout = timeout

    def create(self, record: RecordT) -> RecordT:
        resp = self.session.post(self.url, json=self._dump(record), timeout=self.timeout)
        self._check(resp, 201)
        return self.model.model_validate(resp.json())

    def get(self, record_id: int) -> Optional[RecordT]:
        resp = self.session.get(self.url, params={"id": record_id}, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        self._check(resp, 200)
        return self.model.model_validate(resp.json())

    def list(self) -> List[RecordT]:
        resp = self.session.get(self.url, timeout=self.timeout)
        self._check(resp, 200)
        return [self.model.model_validate(item) for item in resp.json()]

    def update(self, record_id: int, record: RecordT) -> Optional[RecordT]:
        resp = self.session.put(
            self.url, params={"id": record_id}, json=self._dump(record), timeout=self.timeout
        )
        if resp.status_code == 404:
            return None
        self._check(resp, 200)
        return self.model.model_validate(resp.json())

    def delete(self, record_id: int) -> bool:
        resp = self.session.delete(self.url, params={"id": record_id}, timeout=self.timeout)
        if resp.status_code == 404:
            return False
        self._check(resp, 204)
        return True

    @staticmethod
    def _dump(record: RecordT) -> dict:
        return record.model_dump(mode="json")

    @staticmethod
    def _check(resp: requests.Response, expected: int) -> None:
        if resp.status_code == expected:
            return
        detail = resp.text
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "detail" in body:
            detail = body["detail"]
        logger.warning(f"Request to {resp.url} failed with {resp.status_code}: {detail}")
        raise CrudClientError(resp.status_code, detail)
