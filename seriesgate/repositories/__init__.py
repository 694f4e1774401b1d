"""
Repository package for data access layers.

Routers never query the database directly: they receive a repository through
a FastAPI dependency (`get_series_repository`, `get_exam_repository`,
`get_user_repository`) so tests can swap in an in-memory fake via
`app.dependency_overrides`.
"""
