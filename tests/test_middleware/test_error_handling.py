"""Tests for error handling middleware."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastmcp.exceptions import ToolError

from sshit.middleware.errors import ErrorHandlingMiddleware


@pytest.fixture
def mock_context() -> MagicMock:
    context = MagicMock()
    context.method = "tools/call"
    return context


@pytest.mark.asyncio
async def test_passes_through_results(mock_context: MagicMock) -> None:
    middleware = ErrorHandlingMiddleware(logger=MagicMock())

    result = await middleware.on_message(mock_context, AsyncMock(return_value="done"))

    assert result == "done"
    assert middleware.get_error_stats() == {}


@pytest.mark.asyncio
async def test_rejected_input_is_a_warning(mock_context: MagicMock) -> None:
    """ToolError is counted and re-raised but logged below ERROR."""
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger)
    call_next = AsyncMock(side_effect=ToolError("Host cannot be empty"))

    with pytest.raises(ToolError):
        await middleware.on_message(mock_context, call_next)
    with pytest.raises(ToolError):
        await middleware.on_message(mock_context, call_next)

    assert middleware.get_error_stats() == {"ToolError": 2}
    assert "Host cannot be empty" in str(mock_logger.warning.call_args_list)
    mock_logger.error.assert_not_called()

    middleware.reset_stats()
    assert middleware.get_error_stats() == {}


@pytest.mark.asyncio
async def test_unexpected_error_is_logged_and_reraised(mock_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger)

    with pytest.raises(RuntimeError):
        await middleware.on_message(mock_context, AsyncMock(side_effect=RuntimeError("bug")))

    args, kwargs = mock_logger.error.call_args
    assert "tools/call" in args
    assert "RuntimeError" in args
    assert kwargs["exc_info"] is False
    assert middleware.get_error_stats() == {"RuntimeError": 1}


@pytest.mark.asyncio
async def test_traceback_option(mock_context: MagicMock) -> None:
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger, include_traceback=True)

    with pytest.raises(RuntimeError):
        await middleware.on_message(mock_context, AsyncMock(side_effect=RuntimeError("bug")))

    assert mock_logger.error.call_args.kwargs["exc_info"] is True
