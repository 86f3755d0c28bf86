import functools

from sqlalchemy.exc import SQLAlchemyError

from src.app.repositories.errors import PersistenceError


def translate_db_errors(method):
    """Re-raise SQLAlchemy failures of a repository coroutine as PersistenceError"""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            operation = f"{self.__class__.__name__}.{method.__name__}"
            raise PersistenceError(operation, exc) from exc

    return wrapper
