"""
In-memory Todo service package.

The FastAPI application lives in ``todo_service.main`` (``create_app`` and the
module-level ``app``); the store that owns the todo collection lives in
``todo_service.store``. Importing this package has no side effects.
"""

__version__ = "0.1.0"
