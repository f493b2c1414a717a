from contextvars import ContextVar

_trace_id: ContextVar[str] = ContextVar("trace_id", default="-")
_user_id: ContextVar[str] = ContextVar("user_id", default="-")


def get_trace_id() -> str:
    return _trace_id.get()


def set_trace_id(value: str) -> None:
    _trace_id.set(value)


def get_user_id() -> str:
    return _user_id.get()


def set_user_id(value: str | None) -> None:
    """Remember the acting user for log records; blank means anonymous."""
    _user_id.set(value.strip() if value and value.strip() else "-")
