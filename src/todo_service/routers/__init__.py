"""HTTP routers for the todo service."""
