"""Tests for the one-shot search script."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scripts.search import run_search
from wayuu_search.rag.models import SearchResponse


def _services(response: SearchResponse) -> MagicMock:
    services = MagicMock()
    services.collection = "wayuucollection"
    services.pipeline.perform_search = AsyncMock(return_value=response)
    services.close = AsyncMock()
    return services


class TestRunSearch:
    """Tests for run_search."""

    @pytest.mark.asyncio
    async def test_prints_response_and_closes(
        self, capsys: pytest.CaptureFixture[str], tmp_path: Path
    ) -> None:
        """Successful search prints JSON, saves it and closes clients."""
        services = _services(
            SearchResponse(query="jamaya", results=[], ai_response="Hello.")
        )
        output = tmp_path / "response.json"

        with (
            patch("scripts.search.build_services", return_value=services),
            patch("scripts.search.setup_logging"),
        ):
            ok = await run_search("jamaya", limit=3, output_path=output)

        assert ok is True
        services.pipeline.perform_search.assert_called_once_with("jamaya", 3)
        services.close.assert_called_once()
        assert '"aiResponse": "Hello."' in capsys.readouterr().out
        assert json.loads(output.read_text()) == {
            "query": "jamaya",
            "results": [],
            "aiResponse": "Hello.",
        }

    @pytest.mark.asyncio
    async def test_error_response_fails(self) -> None:
        """An error response is reported as failure."""
        services = _services(SearchResponse(query="jamaya", error="Unauthorized"))

        with (
            patch("scripts.search.build_services", return_value=services),
            patch("scripts.search.setup_logging"),
        ):
            ok = await run_search("jamaya", limit=5)

        assert ok is False
        services.close.assert_called_once()
