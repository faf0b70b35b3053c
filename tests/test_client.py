from unittest.mock import MagicMock

import pytest
import requests

from crudstore.client import CrudClient
from crudstore.exceptions import CrudClientError
from crudstore.models import Item


def _response(status_code, body=None, text=""):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.url = "http://svc/item"
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def crud(session):
    return CrudClient("http://svc/", Item, session=session, timeout=2.0)


def test_create_posts_record_and_parses_reply(crud, session):
    session.post.return_value = _response(201, {"id": 1, "title": "Learn Go", "done": False})

    created = crud.create(Item(title="Learn Go"))

    assert created == Item(id=1, title="Learn Go", done=False)
    session.post.assert_called_once_with(
        "http://svc/item", json={"id": 0, "title": "Learn Go", "done": False}, timeout=2.0
    )


def test_get_found_and_missing(crud, session):
    session.get.return_value = _response(200, {"id": 3, "title": "x", "done": True})
    assert crud.get(3) == Item(id=3, title="x", done=True)
    session.get.assert_called_with("http://svc/item", params={"id": 3}, timeout=2.0)

    session.get.return_value = _response(404, {"detail": "Item not found"})
    assert crud.get(4) is None


def test_list_parses_every_record(crud, session):
    session.get.return_value = _response(200, [{"id": 1, "title": "a"}, {"id": 2, "title": "b"}])
    assert [r.id for r in crud.list()] == [1, 2]


def test_update_missing_returns_none(crud, session):
    session.put.return_value = _response(404, {"detail": "Item not found"})
    assert crud.update(9, Item(id=9, title="x")) is None


def test_update_returns_echoed_record(crud, session):
    session.put.return_value = _response(200, {"id": 9, "title": "x", "done": True})
    assert crud.update(9, Item(id=9, title="x", done=True)).done is True


def test_delete_maps_status_to_bool(crud, session):
    session.delete.return_value = _response(204)
    assert crud.delete(1) is True
    session.delete.return_value = _response(404, {"detail": "Item not found"})
    assert crud.delete(1) is False


def test_bad_request_raises_with_detail(crud, session):
    session.get.return_value = _response(400, {"detail": "Invalid ID"})
    with pytest.raises(CrudClientError) as exc_info:
        crud.get(1)
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid ID"


def test_non_json_error_uses_text(crud, session):
    session.post.return_value = _response(502, text="Bad Gateway")
    with pytest.raises(CrudClientError) as exc_info:
        crud.create(Item())
    assert exc_info.value.detail == "Bad Gateway"
