"""Process-wide singletons shared by routers."""

from wrapped_common.db.session import DatabaseManager

db_manager = DatabaseManager.from_env()


def get_db_manager() -> DatabaseManager:
    """FastAPI dependency returning the shared DatabaseManager.

    Services that open one transaction per chunk take the manager rather
    than a request-scoped session.
    """
    return db_manager
