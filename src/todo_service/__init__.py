"""
todo-service: CRUD over todo items and labels behind a swappable repository layer.
"""
