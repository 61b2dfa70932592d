"""Tests for Web handlers."""

import pytest
from unittest.mock import AsyncMock

from stack_builder.core.catalog import STACK_CONFIG
from stack_builder.core.models import SessionData
from stack_builder.core.session import InMemorySessionStore
from stack_builder.core.selection import StackSelection
from stack_builder.web.handlers import WebHandlers
from stack_builder.web.interface import WebInterface


class TestWebHandlersToggleEndpoint:
    """Test toggle endpoint handler."""

    @pytest.mark.asyncio
    async def test_handle_toggle_success(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.toggle_option.return_value = {"selectionSet": ["loki"]}

        handlers = WebHandlers(mock_interface)
        result = await handlers.handle_toggle("session1", {"optionId": "loki", "categoryId": "logs"})

        assert result == {"selectionSet": ["loki"]}
        mock_interface.toggle_option.assert_called_once_with("session1", "loki", "logs")

    @pytest.mark.asyncio
    async def test_handle_toggle_missing_ids(self):
        mock_interface = AsyncMock(spec=WebInterface)

        handlers = WebHandlers(mock_interface)
        result = await handlers.handle_toggle("session1", {"optionId": "loki"})

        assert "error" in result
        mock_interface.toggle_option.assert_not_called()

    @pytest.mark.asyncio
    async def test_handle_toggle_propagates_exceptions(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.toggle_option.side_effect = RuntimeError("boom")

        handlers = WebHandlers(mock_interface)
        with pytest.raises(RuntimeError, match="boom"):
            await handlers.handle_toggle("session1", {"optionId": "loki", "categoryId": "logs"})


class TestWebHandlersSubmitEndpoint:
    """Test contact submission endpoint handler."""

    @pytest.mark.asyncio
    async def test_handle_submit_success(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.submit_connect.return_value = {
            "submission": {"selectedStack": ["loki", "slack"]},
            "state": {"currentStep": "success"},
        }

        response = await WebHandlers(mock_interface).handle_submit("session1", {"name": "Ada"})

        assert response.status_code == 200
        assert response.to_dict()["state"]["currentStep"] == "success"

    @pytest.mark.asyncio
    async def test_handle_submit_validation_error(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.submit_connect.return_value = {
            "error": "Contact request is invalid",
            "fieldErrors": {"name": "Name is required"},
            "state": {"currentStep": "connect"},
        }

        response = await WebHandlers(mock_interface).handle_submit("session1", {})

        assert response.status_code == 400
        assert response.to_dict()["fieldErrors"] == {"name": "Name is required"}

    @pytest.mark.asyncio
    async def test_handle_submit_wrong_step(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.submit_connect.return_value = {
            "error": "Contact form can only be submitted from the connect step",
            "state": {"currentStep": "select"},
        }

        response = await WebHandlers(mock_interface).handle_submit("session1", {})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_handle_submit_missing_session(self):
        mock_interface = AsyncMock(spec=WebInterface)
        mock_interface.submit_connect.return_value = {"error": "No active session found"}

        response = await WebHandlers(mock_interface).handle_submit("session1", {})

        assert response.status_code == 400


class TestWebHandlersCatalogAndSubmissions:
    def test_handle_catalog(self):
        handlers = WebHandlers(WebInterface(InMemorySessionStore()))

        result = handlers.handle_catalog()

        assert [c["id"] for c in result["categories"]] == [c.id for c in STACK_CONFIG]
        assert len(result["assessmentLevels"]) == 6
        assert result["assessmentLevels"][0]["min"] == 0
        assert len(result["feedback"]) == 5
        assert len(result["problemOptions"]) == 5
        assert len(result["integrations"]) == 12
        infra = next(c for c in result["categories"] if c["id"] == "infrastructure")
        aws = next(o for o in infra["options"] if o["id"] == "aws")
        assert aws["subOptions"][0]["id"] == "ecs"

    def test_handle_get_all_submissions(self):
        store = InMemorySessionStore()
        store.set("with", SessionData(selection=StackSelection(), submission={"selectedStack": ["loki"]}))
        store.set("without", SessionData(selection=StackSelection()))
        handlers = WebHandlers(WebInterface(store))

        result = handlers.handle_get_all_submissions()

        assert result["count"] == 1
        assert result["submissions"][0] == {"session_id": "with", "selectedStack": ["loki"]}

    def test_handle_get_submission(self):
        store = InMemorySessionStore()
        store.set("done", SessionData(selection=StackSelection(), submission={"selectedStack": ["loki"]}))
        store.set("pending", SessionData(selection=StackSelection()))
        handlers = WebHandlers(WebInterface(store))

        assert handlers.handle_get_submission("done") == {"submission": {"selectedStack": ["loki"]}}
        assert handlers.handle_get_submission("pending") == {"error": "No submission found for this session"}
        assert handlers.handle_get_submission("missing") == {"error": "Session not found"}
