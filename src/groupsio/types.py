"""Data types shared by the groups.io client and the search pipeline."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Credentials:
    """Login identity for groups.io. The password never appears in repr()."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class Session:
    """Opaque authentication cookie returned by a successful login.

    Passed explicitly to every fetch; the client itself holds no session state.
    """

    cookie: str

    def headers(self) -> dict[str, str]:
        """Request headers that authenticate a call with this session."""
        return {"Cookie": self.cookie} if self.cookie else {}


@dataclass(frozen=True)
class SearchTarget:
    """What to search: a query plus exactly one of group ID or group name."""

    query: str
    group_id: int | None = None
    group_name: str | None = None

    def __post_init__(self) -> None:
        if (self.group_id is None) == (self.group_name is None):
            raise ValueError("exactly one of group_id or group_name must be set")

    @property
    def group_label(self) -> str:
        return str(self.group_id) if self.group_id is not None else str(self.group_name)

    def params(self, page: int) -> dict[str, str | int]:
        """Query parameters for the searcharchives endpoint at a 1-based page."""
        params: dict[str, str | int] = {"q": self.query, "page": page}
        if self.group_id is not None:
            params["group_id"] = self.group_id
        else:
            params["group_name"] = str(self.group_name)
        return params


@dataclass(frozen=True)
class MessageRecord:
    """One archived message as returned by searcharchives.

    The server decides which fields are present.  Only subject, from, date
    and body are read; every other key is kept untouched in ``raw``.
    """

    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MessageRecord":
        return cls(raw=dict(data))

    def _text(self, key: str) -> str:
        value = self.raw.get(key)
        return "" if value is None else str(value)

    @property
    def subject(self) -> str:
        return self._text("subject")

    @property
    def sender(self) -> str:
        return self._text("from")

    @property
    def date(self) -> str:
        return self._text("date")

    @property
    def body(self) -> str:
        return self._text("body")


@dataclass(frozen=True)
class PageResponse:
    """A single page of search results.

    ``total_count`` is the server's count of all matches across every page.
    """

    records: list[MessageRecord]
    total_count: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PageResponse":
        items = data.get("data") or []
        try:
            total = int(data.get("total_count") or 0)
        except (TypeError, ValueError):
            total = 0
        return cls(
            records=[MessageRecord.from_dict(m) for m in items if isinstance(m, dict)],
            total_count=total,
        )


# Ordered by page, then in-page order.  Immutable once pagination completes.
ResultSet = tuple[MessageRecord, ...]
