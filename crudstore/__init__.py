"""Generic in-memory CRUD over HTTP for a single record shape."""

from crudstore.store import Store
from crudstore.dispatcher import Dispatcher, register_crud
from crudstore.models import Identified, Item

__version__ = "0.1.0"

__all__ = ["Store", "Dispatcher", "register_crud", "Identified", "Item"]
