from typing import Optional, Type

from fastapi import FastAPI, Request

from crudstore.config import ServerConfig, get_config
from crudstore.dispatcher import register_crud
from crudstore.models import Item
from crudstore.store import Store


def create_app(
    store: Optional[Store] = None,
    config: Optional[ServerConfig] = None,
    model: Type = Item,
) -> FastAPI:
    config = config or get_config()
    store = store if store is not None else Store()

    app = FastAPI(title="crudstore", description=f"In-memory CRUD for {model.__name__}")
    app.state.store = store
    app.state.config = config
    register_crud(app, config.path, model, store)

    @app.get("/health")
    def health(request: Request):
        return {"status": "ok", "records": len(request.app.state.store)}

    return app
