"""API Routes Package"""
from .demo import demo_routes
from .todos import todo_routes

__all__ = ["demo_routes", "todo_routes"]
