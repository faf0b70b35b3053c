"""
Request dispatcher
==================
Maps one HTTP request on a resource path to one Store call, for whatever
record shape it was registered with.

    POST            decode body, create          201 + record
    GET             all records                  200 + array
    GET    ?id=N    one record                   200 + record | 404
    PUT    ?id=N    decode body, replace         200 + body as submitted | 404
    DELETE ?id=N    remove                       204 | 404
    anything else                                405

Malformed ids and undecodable bodies are 400 and never touch the store.
"""

import re
from typing import Generic, Optional, Type, Union

from fastapi import APIRouter, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from loguru import logger
from pydantic import BaseModel, ValidationError

from crudstore.exceptions import (
    CrudError,
    InvalidIDError,
    InvalidPayloadError,
    RecordNotFoundError,
    UnsupportedMethodError,
)
from crudstore.store import RecordT, Store

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
# Routed to the dispatcher only so they get a 405 with our error body.
ROUTED_METHODS = SUPPORTED_METHODS + ("PATCH", "HEAD", "OPTIONS")

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_ID_MIN = -(2 ** 63)
_ID_MAX = 2 ** 63 - 1


def parse_id(raw: Optional[str]) -> int:
    """
    Parse the ``id`` query parameter as a signed decimal integer.

    Accepts an optional sign followed by ASCII digits that fit in 64 bits.
    Raises InvalidIDError for anything else, including a missing value.
    """
    if raw is None or not _ID_PATTERN.fullmatch(raw):
        raise InvalidIDError(raw)
    value = int(raw)
    if value < _ID_MIN or value > _ID_MAX:
        raise InvalidIDError(raw)
    return value


def error_response(exc: CrudError) -> JSONResponse:
    if isinstance(exc, RecordNotFoundError):
        logger.debug(f"Record {exc.record_id} not found")
    else:
        logger.warning(f"Rejected request ({exc.error_code}): {exc.message}")

    headers = None
    if isinstance(exc, UnsupportedMethodError):
        headers = {"Allow": ", ".join(SUPPORTED_METHODS)}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def _to_json(record: BaseModel) -> dict:
    return record.model_dump(mode="json")


class Dispatcher(Generic[RecordT]):
    """
    Stateless translator from a request to a Store call.

    ``model`` is the record shape bodies are decoded into; the store is
    injected so several dispatchers (or tests) can each own their own.
    """

    def __init__(self, model: Type[RecordT], store: Store[RecordT]):
        self.model = model
        self.store = store

    async def handle(self, request: Request) -> Response:
        # First value wins when ``id`` is repeated in the query string.
        ids = request.query_params.getlist("id")
        raw_id = ids[0] if ids else None
        body = await request.body()
        # Store calls take a blocking lock, keep them off the event loop.
        return await run_in_threadpool(self.dispatch, request.method, raw_id, body)

    def dispatch(self, method: str, raw_id: Optional[str], body: bytes) -> Response:
        """Run one request against the store and build its response."""
        try:
            return self._dispatch(method.upper(), raw_id, body)
        except CrudError as exc:
            return error_response(exc)

    def _dispatch(self, method: str, raw_id: Optional[str], body: bytes) -> Response:
        if method == "POST":
            record = self._decode(body)
            created = self.store.create(record)
            return JSONResponse(status_code=201, content=_to_json(created))

        if method == "GET":
            if not raw_id:
                return JSONResponse(content=[_to_json(r) for r in self.store.get_all()])
            record_id = parse_id(raw_id)
            found = self.store.get(record_id)
            if found is None:
                raise RecordNotFoundError(record_id)
            return JSONResponse(content=_to_json(found))

        if method == "PUT":
            record_id = parse_id(raw_id)
            record = self._decode(body)
            if not self.store.update(record_id, record):
                raise RecordNotFoundError(record_id)
            # Echo what was submitted, not a re-read of the store.
            return JSONResponse(content=_to_json(record))

        if method == "DELETE":
            record_id = parse_id(raw_id)
            if not self.store.delete(record_id):
                raise RecordNotFoundError(record_id)
            return Response(status_code=204)

        raise UnsupportedMethodError(method)

    def _decode(self, body: bytes) -> RecordT:
        try:
            return self.model.model_validate_json(body, strict=True)
        except ValidationError as exc:
            raise InvalidPayloadError(str(exc)) from exc


def register_crud(
    app: Union[FastAPI, APIRouter],
    path: str,
    model: Type[RecordT],
    store: Store[RecordT],
) -> Dispatcher[RecordT]:
    """Serve ``model`` records from ``store`` on ``path`` of ``app``."""
    dispatcher = Dispatcher(model, store)
    app.add_api_route(
        path,
        dispatcher.handle,
        methods=list(ROUTED_METHODS),
        include_in_schema=False,
    )
    logger.info(f"Registered CRUD routes for {model.__name__} on {path}")
    return dispatcher
