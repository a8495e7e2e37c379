"""Search run orchestration: login, paginate, project, hand off to a sink."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from src.groupsio.client import AuthError
from src.groupsio.types import Credentials, SearchTarget
from src.search.paginator import ArchivePaginator
from src.search.projector import OutputMode, Projected, project

if TYPE_CHECKING:
    from src.groupsio.client import GroupsIOClient

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOGIN_FAILED = 1


@runtime_checkable
class ResultSink(Protocol):
    """Destination for projected search results (file, console, ...)."""

    def emit(self, projected: Projected, mode: OutputMode) -> None:
        """Deliver the projected results."""
        ...

    def no_results(self, target: SearchTarget) -> None:
        """Report that the search matched nothing."""
        ...


async def run_search(
    client: GroupsIOClient,
    credentials: Credentials,
    target: SearchTarget,
    sink: ResultSink,
    mode: OutputMode = OutputMode.BODY,
    paginator: ArchivePaginator | None = None,
) -> int:
    """Run one complete search and return the process exit code.

    A failed login aborts with EXIT_LOGIN_FAILED and the sink is never
    touched.  Fetch failures during pagination are not fatal: whatever was
    collected is still projected and emitted.
    """
    try:
        session = await client.login(credentials)
    except AuthError as exc:
        logger.error("Failed to login. Cannot continue: %s", exc)
        if exc.body:
            logger.error("Response data: %s", exc.body)
        return EXIT_LOGIN_FAILED

    logger.info("Searching for %r in group %s...", target.query, target.group_label)
    results = await (paginator or ArchivePaginator(client)).collect(session, target)

    if not results:
        sink.no_results(target)
        return EXIT_OK

    logger.info("Projecting %d result(s) as %s", len(results), mode.value)
    sink.emit(project(results, mode), mode)
    return EXIT_OK
