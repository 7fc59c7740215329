"""Unit tests for interactive environment file selection."""

from unittest.mock import patch

from gitfresh.cli.prompts import prompt_secret_selection
from gitfresh.protection.resolver import ProtectAll, ProtectNone, ProtectSelected

DETECTED = (".env", "config/.env", "app.env")


class TestPromptSecretSelection:
    """Tests for prompt_secret_selection."""

    def test_all(self) -> None:
        """Choosing all protects every file."""
        with patch("gitfresh.cli.prompts.Prompt.ask", return_value="all") as mock_ask:
            assert prompt_secret_selection(DETECTED) == ProtectAll()

        assert mock_ask.call_args.kwargs["default"] == "all"
        assert mock_ask.call_args.kwargs["choices"] == ["all", "select", "none"]

    def test_none(self) -> None:
        """Choosing none protects nothing."""
        with patch("gitfresh.cli.prompts.Prompt.ask", return_value="none"):
            assert prompt_secret_selection(DETECTED) == ProtectNone()

    def test_select(self) -> None:
        """Choosing select asks about every file."""
        with (
            patch("gitfresh.cli.prompts.Prompt.ask", return_value="select"),
            patch(
                "gitfresh.cli.prompts.Confirm.ask", side_effect=[True, False, True]
            ) as mock_confirm,
        ):
            selection = prompt_secret_selection(DETECTED)

        assert selection == ProtectSelected(paths=(".env", "app.env"))
        assert mock_confirm.call_count == 3
        assert mock_confirm.call_args.kwargs["default"] is True
