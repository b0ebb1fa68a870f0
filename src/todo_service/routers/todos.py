from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from ..exceptions import InvalidTodoIdError, TodoNotFoundError
from ..schemas import (
    MessageEnvelope,
    TodoCreate,
    TodoEnvelope,
    TodoListData,
    TodoListEnvelope,
    TodoOut,
    TodoUpdate,
)
from ..store import Store
from ..utils import success_envelope

router = APIRouter(tags=["todos"])

_FAILURE_RESPONSES = {
    400: {"model": MessageEnvelope, "description": "Invalid id or request body"},
    404: {"model": MessageEnvelope, "description": "Todo not found"},
}


# PUBLIC_INTERFACE
def get_store(request: Request) -> Store:
    """
    Dependency returning the store owned by the running application.
    """
    return request.app.state.store


def _parse_id(raw_id: str) -> int:
    try:
        return int(raw_id)
    except ValueError:
        raise InvalidTodoIdError(raw_id) from None


# PUBLIC_INTERFACE
@router.get(
    "/todos",
    response_model=TodoListEnvelope,
    summary="List Todos",
    description="Return every Todo item in insertion order together with the count.",
)
def list_todos(store: Store = Depends(get_store)) -> TodoListEnvelope:
    """
    List all todos.
    """
    todos = [TodoOut(**t) for t in store.list_all()]  # type: ignore[arg-type]
    data = TodoListData(todos=todos, count=len(todos))
    return TodoListEnvelope(**success_envelope(data))


# PUBLIC_INTERFACE
@router.get(
    "/todo/{todo_id}",
    response_model=TodoEnvelope,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses=_FAILURE_RESPONSES,
)
def get_todo(todo_id: str, store: Store = Depends(get_store)) -> TodoEnvelope:
    """
    Retrieve a single Todo item by its ID.
    """
    item = store.get(_parse_id(todo_id))
    if item is None:
        raise TodoNotFoundError(todo_id)
    return TodoEnvelope(**success_envelope(TodoOut(**item)))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/todo/create",
    response_model=TodoEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={400: _FAILURE_RESPONSES[400]},
)
def create_todo(
    payload: Optional[TodoCreate] = None, store: Store = Depends(get_store)
) -> TodoEnvelope:
    """
    Create a new Todo. A missing, blank or non-string title is rejected with 400.
    """
    created = store.create(payload.title if payload else None)
    return TodoEnvelope(**success_envelope(TodoOut(**created), "todo created"))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/todo/update/{todo_id}",
    response_model=TodoEnvelope,
    summary="Update Todo",
    description="Partially update a Todo item. Only fields present in the body are changed.",
    responses=_FAILURE_RESPONSES,
)
def update_todo(
    todo_id: str,
    payload: Optional[TodoUpdate] = None,
    store: Store = Depends(get_store),
) -> TodoEnvelope:
    """
    Partial update of a Todo item. A supplied title that is blank is rejected with 400.
    """
    tid = _parse_id(todo_id)
    # Only keys present in the request body count as supplied
    fields = payload.model_dump(exclude_unset=True) if payload else {}
    updated = store.update(tid, fields)
    if updated is None:
        raise TodoNotFoundError(todo_id)
    return TodoEnvelope(**success_envelope(TodoOut(**updated), "todo updated"))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/todo/delete/{todo_id}",
    response_model=MessageEnvelope,
    summary="Delete Todo",
    description="Delete a Todo item by ID.",
    responses=_FAILURE_RESPONSES,
)
def delete_todo(todo_id: str, store: Store = Depends(get_store)) -> MessageEnvelope:
    """
    Delete a Todo. Returns 200 with a confirmation message, 404 if not found.
    """
    if not store.delete(_parse_id(todo_id)):
        raise TodoNotFoundError(todo_id)
    return MessageEnvelope(**success_envelope(message="todo deleted"))
