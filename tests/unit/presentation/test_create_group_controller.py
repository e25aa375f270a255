"""Unit tests for the create-group screen controller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID, uuid4

import pytest

from core.exceptions import AuthenticationError, ProfileNotFoundError
from domain.entities.group import Group
from presentation import create_group as create_group_module
from presentation.create_group import CreateGroupController

SHORT_DELAY = 0.01


@pytest.fixture
def group() -> Group:
    return Group(name="Math 101", owner_id=uuid4(), join_code="K7Q2ZP")


@pytest.fixture
def service(group: Group) -> AsyncMock:
    service = AsyncMock()
    service.create.return_value = group
    return service


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock()


@pytest.fixture
def current_user(user_id: UUID) -> AsyncMock:
    return AsyncMock(return_value=user_id)


@pytest.fixture
def controller(
    service: AsyncMock, navigator: MagicMock, current_user: AsyncMock
) -> CreateGroupController:
    controller = CreateGroupController(
        service,
        navigator,
        current_user,
        redirect_delay=SHORT_DELAY,
    )
    controller.group_name = "Math 101"
    return controller


class TestSubmit:
    @pytest.mark.asyncio
    async def test_success_records_group_and_redirects_after_delay(
        self,
        controller: CreateGroupController,
        service: AsyncMock,
        navigator: MagicMock,
        group: Group,
        user_id: UUID,
    ):
        result = await controller.submit()

        assert result is group
        service.create.assert_awaited_once_with(user_id, "Math 101")
        assert controller.success
        assert controller.created_group_id == group.id
        assert controller.error is None
        assert not controller.busy
        assert controller.redirect_pending
        navigator.go_to.assert_not_called()

        await asyncio.sleep(SHORT_DELAY * 5)

        navigator.go_to.assert_called_once_with(f"/attendance/{group.id}")
        assert not controller.redirect_pending

    @pytest.mark.asyncio
    async def test_blank_name_is_not_submitted(
        self, controller: CreateGroupController, service: AsyncMock
    ):
        controller.group_name = "   "

        assert not controller.can_submit
        assert await controller.submit() is None
        service.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_second_submit_ignored_while_busy(
        self,
        controller: CreateGroupController,
        service: AsyncMock,
        group: Group,
    ):
        release = asyncio.Event()

        async def slow_create(user_id: UUID, name: str) -> Group:
            await release.wait()
            return group

        service.create.side_effect = slow_create

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.busy
        assert not controller.can_submit

        assert await controller.submit() is None

        release.set()
        assert await first is group
        assert service.create.await_count == 1
        await controller.close()

    @pytest.mark.asyncio
    async def test_failure_sets_error_message(
        self,
        controller: CreateGroupController,
        service: AsyncMock,
        navigator: MagicMock,
        user_id: UUID,
    ):
        service.create.side_effect = ProfileNotFoundError(str(user_id))

        assert await controller.submit() is None

        assert controller.error == "Profile not found"
        assert not controller.busy
        assert not controller.success
        assert not controller.redirect_pending
        navigator.go_to.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_user_is_passed_to_workflow(
        self,
        controller: CreateGroupController,
        service: AsyncMock,
        current_user: AsyncMock,
    ):
        current_user.return_value = None
        service.create.side_effect = AuthenticationError("No user found")

        await controller.submit()

        service.create.assert_awaited_once_with(None, "Math 101")
        assert controller.error == "No user found"

    @pytest.mark.asyncio
    async def test_retry_after_failure_clears_error(
        self,
        controller: CreateGroupController,
        service: AsyncMock,
        group: Group,
        user_id: UUID,
    ):
        service.create.side_effect = [ProfileNotFoundError(str(user_id)), group]

        await controller.submit()
        assert controller.error == "Profile not found"

        assert await controller.submit() is group
        assert controller.error is None
        await controller.close()


class TestRedirectLifetime:
    @pytest.mark.asyncio
    async def test_close_cancels_pending_redirect(
        self, controller: CreateGroupController, navigator: MagicMock
    ):
        await controller.submit()
        await controller.close()

        await asyncio.sleep(SHORT_DELAY * 5)

        navigator.go_to.assert_not_called()
        assert not controller.redirect_pending
        assert not controller.can_submit

    @pytest.mark.asyncio
    async def test_context_manager_closes(
        self, service: AsyncMock, navigator: MagicMock, current_user: AsyncMock
    ):
        async with CreateGroupController(
            service, navigator, current_user, redirect_delay=SHORT_DELAY
        ) as controller:
            controller.group_name = "Math 101"
            await controller.submit()

        await asyncio.sleep(SHORT_DELAY * 5)
        navigator.go_to.assert_not_called()

    @pytest.mark.asyncio
    async def test_continue_now_navigates_once(
        self, controller: CreateGroupController, navigator: MagicMock, group: Group
    ):
        await controller.submit()

        controller.continue_now()
        await asyncio.sleep(SHORT_DELAY * 5)

        navigator.go_to.assert_called_once_with(f"/attendance/{group.id}")

    @pytest.mark.asyncio
    async def test_continue_now_without_group_does_nothing(
        self, controller: CreateGroupController, navigator: MagicMock
    ):
        controller.continue_now()

        navigator.go_to.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_redirect_template(
        self, service: AsyncMock, navigator: MagicMock, current_user: AsyncMock, group: Group
    ):
        controller = CreateGroupController(
            service,
            navigator,
            current_user,
            redirect_delay=0,
            redirect_path_template="/groups/{group_id}/roster",
        )
        controller.group_name = "Math 101"

        await controller.submit()
        await asyncio.sleep(SHORT_DELAY)

        navigator.go_to.assert_called_once_with(f"/groups/{group.id}/roster")


class TestRedirectFailure:
    @pytest.mark.asyncio
    async def test_navigation_error_is_logged(
        self, controller: CreateGroupController, navigator: MagicMock
    ):
        navigator.go_to.side_effect = RuntimeError("router unmounted")

        with patch.object(create_group_module, "logger") as mock_logger:
            await controller.submit()
            await asyncio.sleep(SHORT_DELAY * 5)

        mock_logger.error.assert_called_once_with(
            "group_redirect_failed",
            error="router unmounted",
            error_type="RuntimeError",
        )
        assert not controller.redirect_pending

    @pytest.mark.asyncio
    async def test_cancelled_redirect_is_not_logged_as_failure(
        self, controller: CreateGroupController
    ):
        with patch.object(create_group_module, "logger") as mock_logger:
            await controller.submit()
            await controller.close()
            await asyncio.sleep(0)

        mock_logger.error.assert_not_called()
