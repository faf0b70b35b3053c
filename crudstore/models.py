from typing import Protocol

from pydantic import BaseModel


class Identified(Protocol):
    """Any record the store can hold: it only needs a writable integer id."""

    id: int


class Item(BaseModel):
    id: int = 0
    title: str = ""
    done: bool = False
