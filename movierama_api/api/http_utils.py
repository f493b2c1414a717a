from functools import wraps
from http import HTTPStatus
from fastapi import HTTPException

ERRMAP: dict[str, HTTPStatus] = {
    "movie_not_found": HTTPStatus.NOT_FOUND,
    "reaction_not_found": HTTPStatus.NOT_FOUND,
    "self_reaction_forbidden": HTTPStatus.FORBIDDEN,
    "duplicate_reaction": HTTPStatus.CONFLICT,
    "concurrency_conflict": HTTPStatus.CONFLICT,
    "movie_already_exists": HTTPStatus.CONFLICT,
    "counter_adjustment_failed": HTTPStatus.INTERNAL_SERVER_ERROR,
}


def handle_runtime_errors(mapping: dict[str, HTTPStatus]):
    """
    Translate RuntimeErrors carrying a text code into HTTPException.

    Typed service errors expose ``code``; plain RuntimeErrors are matched
    by substring of their message. Anything unknown becomes a 500.
    """
    def decorator(fn):
        @wraps(fn)
        async def wrapper(*args, **kwargs):
            try:
                return await fn(*args, **kwargs)
            except RuntimeError as e:
                code = getattr(e, "code", None)
                if code in mapping:
                    raise HTTPException(status_code=mapping[code],
                                        detail=code)
                msg = str(e)
                for key, status in mapping.items():
                    if key in msg:
                        raise HTTPException(status_code=status, detail=key)
                raise HTTPException(
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                    detail="internal_error")
        return wrapper
    return decorator
