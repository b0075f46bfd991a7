"""
Job Tracker Backend.

Core components:
- auth: token codec and request authentication
- jobs: query building, owner-scoped storage, statistics
- api: FastAPI app, routes and schemas
- db: SQLAlchemy tables and sessions
"""
