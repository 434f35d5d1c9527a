from unittest.mock import MagicMock, patch

import pytest

from contract_analyzer.main import main


class TestMain:
    def test_exits_with_status_one_on_missing_credentials(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("EXTRACTION_PROVIDER", "gemini")
        with patch("contract_analyzer.main.uvicorn.run") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    def test_serves_app_with_configured_address(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXTRACTION_PROVIDER", "example")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.delenv("HOST", raising=False)
        app = MagicMock()
        with (
            patch("contract_analyzer.main.create_app", return_value=app),
            patch("contract_analyzer.main.uvicorn.run") as mock_run,
        ):
            main()

        mock_run.assert_called_once_with(app, host="0.0.0.0", port=8080, log_config=None)
