from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Request body for creating a Todo item.

    The title is optional here so that a missing or blank title reaches the
    store, which owns title validation and reports it as a 400.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy groceries"}})

    title: Optional[str] = Field(default=None, description="Short title for the todo item")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Request body for updating an existing Todo item.
    All fields are optional; only fields present in the body are applied.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy groceries and supplies", "completed": True}}
    )

    title: Optional[str] = Field(default=None, description="New title for the todo item")
    completed: Optional[bool] = Field(default=None, description="New completion status")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy groceries",
                "completed": False,
                "createdAt": "2025-01-25T10:15:30.123456+00:00",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")


class TodoListData(BaseModel):
    todos: List[TodoOut] = Field(..., description="All todo items in insertion order")
    count: int = Field(..., description="Number of todo items")


class MessageEnvelope(BaseModel):
    """
    Response envelope without a payload. code is 0 on success and -1 on failure.
    """

    code: int = Field(0, description="0 on success, -1 on failure")
    message: str = Field(..., description="Human-readable status message")


class TodoEnvelope(MessageEnvelope):
    data: TodoOut


class TodoListEnvelope(MessageEnvelope):
    data: TodoListData
