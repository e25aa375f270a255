"""Controller behind the "create group" screen.

Holds the form state a client renders (name, busy flag, inline error,
success) and owns the delayed redirect that follows a successful creation.
The redirect is an ``asyncio`` task bound to the controller's lifetime:
closing the controller cancels it, so nothing navigates away from a screen
that is already gone.
"""

import asyncio
import contextlib
from typing import Awaitable, Callable, Optional, Protocol
from uuid import UUID

import structlog

from core.config import settings
from core.exceptions import AppException
from domain.entities.group import Group

logger = structlog.get_logger()


class Navigator(Protocol):
    """Routing collaborator."""

    def go_to(self, path: str) -> None:
        """Replace the current screen with ``path``."""
        ...


class GroupCreator(Protocol):
    async def create(self, user_id: Optional[UUID], name: str) -> Group:
        ...


class CreateGroupController:
    """Form state and submit flow for creating a group."""

    def __init__(
        self,
        service: GroupCreator,
        navigator: Navigator,
        current_user: Callable[[], Awaitable[Optional[UUID]]],
        redirect_delay: float = settings.redirect_delay_seconds,
        redirect_path_template: str = settings.redirect_path_template,
    ) -> None:
        self._service = service
        self._navigator = navigator
        self._current_user = current_user
        self._redirect_delay = redirect_delay
        self._redirect_path_template = redirect_path_template

        self.group_name = ""
        self.busy = False
        self.error: Optional[str] = None
        self.created_group: Optional[Group] = None

        self._redirect_task: Optional[asyncio.Task[None]] = None
        self._navigated = False
        self._closed = False

    @property
    def success(self) -> bool:
        return self.created_group is not None

    @property
    def created_group_id(self) -> Optional[UUID]:
        return self.created_group.id if self.created_group else None

    @property
    def can_submit(self) -> bool:
        """False while a submission is in flight or the name is blank."""
        return not self.busy and not self._closed and bool(self.group_name.strip())

    @property
    def redirect_pending(self) -> bool:
        return self._redirect_task is not None and not self._redirect_task.done()

    async def submit(self) -> Optional[Group]:
        """Create the group named in the form.

        Returns the created group, or None if the submission was ignored or
        failed (the failure message is left in ``error``).
        """
        if not self.can_submit:
            return None

        self.busy = True
        self.error = None
        try:
            user_id = await self._current_user()
            group = await self._service.create(user_id, self.group_name)
        except AppException as exc:
            self.error = exc.message
            return None
        finally:
            self.busy = False

        self.created_group = group
        if not self._closed:
            self._redirect_task = asyncio.create_task(
                self._redirect_after_delay(self._path_for(group.id))
            )
            self._redirect_task.add_done_callback(self._log_redirect_failure)
        return group

    def continue_now(self) -> None:
        """Skip the remaining delay and navigate to the new group."""
        if self.created_group is None or self._closed:
            return
        self._cancel_redirect()
        self._navigate(self._path_for(self.created_group.id))

    async def close(self) -> None:
        """Tear down the screen; a pending redirect is cancelled."""
        self._closed = True
        task = self._cancel_redirect()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def __aenter__(self) -> "CreateGroupController":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- Internal helpers ---

    def _path_for(self, group_id: UUID) -> str:
        return self._redirect_path_template.format(group_id=group_id)

    async def _redirect_after_delay(self, path: str) -> None:
        await asyncio.sleep(self._redirect_delay)
        self._navigate(path)

    def _navigate(self, path: str) -> None:
        if self._navigated:
            return
        self._navigated = True
        logger.info("group_redirect", path=path)
        self._navigator.go_to(path)

    def _cancel_redirect(self) -> Optional["asyncio.Task[None]"]:
        task = self._redirect_task
        self._redirect_task = None
        if task is not None and not task.done():
            task.cancel()
            return task
        return None

    @staticmethod
    def _log_redirect_failure(task: "asyncio.Task[None]") -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "group_redirect_failed",
                error=str(exc),
                error_type=type(exc).__name__,
            )
