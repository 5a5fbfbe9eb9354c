from collections.abc import Iterator

import pytest

from tikiti.platform.config.core_setting import settings
from tikiti.platform.exception.exceptions import NotFoundError
from tikiti.platform.logging.loguru_io import Logger
from tikiti.platform.logging.loguru_io_config import call_depth_var, chain_start_time_var
from tikiti.platform.logging.loguru_io_utils import (
    enter_call,
    exit_call,
    mask_sensitive,
    redact,
    should_mask_keyword,
    truncate_content,
)


@pytest.fixture
def captured_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[str]]:
    monkeypatch.setattr(settings, 'DEBUG', True)
    messages: list[str] = []
    handler_id = Logger.base.add(
        lambda message: messages.append(str(message)), format='{level} {message}', level='DEBUG'
    )
    yield messages
    Logger.base.remove(handler_id)


@pytest.mark.unit
class TestMaskSensitive:
    def test_masks_key_value_pairs_in_reprs(self) -> None:
        masked = mask_sensitive("Settings(secret_key='sk_live_123', name='tikiti')")

        assert 'sk_live_123' not in masked
        assert "secret_key='********'" in masked
        assert "name='tikiti'" in masked

    def test_masks_ticket_code(self) -> None:
        masked = mask_sensitive("TicketEntity(id='t1', code='TICKET-e1-u1-1-0-abcd')")

        assert 'TICKET-e1-u1-1-0-abcd' not in masked
        assert "id='t1'" in masked

    def test_returns_original_object_when_nothing_to_mask(self) -> None:
        data = {'event_id': 'e1'}
        assert mask_sensitive(data) is data

    def test_should_mask_keyword(self) -> None:
        assert should_mask_keyword('password', 'hunter2') == '********'
        assert should_mask_keyword('event_id', 'e1') == 'e1'


@pytest.mark.unit
class TestRedact:
    def test_masks_nested_keys(self) -> None:
        result = redact({'request': {'code': 'TICKET-1', 'event_id': 'e1'}, 'items': ['x']})

        assert result == {'request': {'code': '********', 'event_id': 'e1'}, 'items': ['x']}

    def test_caps_large_payloads(self) -> None:
        result = redact(['y' * 400, 'z' * 400])

        assert isinstance(result, str)
        assert result.endswith('chars)')


@pytest.mark.unit
class TestTruncateContent:
    def test_long_content_is_truncated(self) -> None:
        result = truncate_content('x' * 600, max_length=500)

        assert result.startswith('x' * 500)
        assert result.endswith('(600 chars)')

    @pytest.mark.parametrize('value', [None, 3, 2.5, 'short'])
    def test_short_and_scalar_values_untouched(self, value: object) -> None:
        assert truncate_content(value) == value


@pytest.mark.unit
class TestCallChain:
    def test_nested_calls_share_the_outermost_start(self) -> None:
        # Act
        outer = enter_call()
        inner = enter_call()
        exit_call()
        depth_after_inner = call_depth_var.get()
        exit_call()

        # Assert
        assert inner == outer
        assert depth_after_inner == 1
        assert call_depth_var.get() == 0
        assert chain_start_time_var.get() == 0.0


@pytest.mark.unit
class TestLoggerIo:
    @pytest.mark.asyncio
    async def test_async_function_result_passes_through(self) -> None:
        @Logger.io
        async def add(a: int, b: int) -> int:
            return a + b

        assert await add(1, b=2) == 3
        assert call_depth_var.get() == 0

    def test_exception_is_reraised(self) -> None:
        @Logger.io
        def boom() -> None:
            raise ValueError('boom')

        with pytest.raises(ValueError, match='boom'):
            boom()

    @pytest.mark.asyncio
    async def test_secrets_never_reach_the_log(self, captured_logs: list[str]) -> None:
        # Arrange
        @Logger.io
        async def verify(*, reference: str, secret_key: str) -> str:
            return reference

        # Act
        await verify(reference='ref-1', secret_key='sk_live_123')

        # Assert
        joined = '\n'.join(captured_logs)
        assert 'sk_live_123' not in joined
        assert "'reference': 'ref-1'" in joined
        assert 'return: ref-1' in joined

    @pytest.mark.asyncio
    async def test_exception_logged_once_across_nested_calls(
        self, captured_logs: list[str]
    ) -> None:
        # Arrange
        @Logger.io
        async def inner() -> None:
            raise NotFoundError('Ticket not found')

        @Logger.io
        async def outer() -> None:
            await inner()

        # Act
        with pytest.raises(NotFoundError):
            await outer()

        # Assert
        errors = [line for line in captured_logs if line.startswith('ERROR')]
        assert len(errors) == 1
        assert 'NOT_FOUND' in errors[0]
