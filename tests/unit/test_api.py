import io
from unittest.mock import MagicMock

from fakes import ScriptedClient, make_container, pdf_upload
from fastapi import UploadFile
from fastapi.testclient import TestClient

from contract_analyzer.api.app import create_app
from contract_analyzer.api.container import AppContainer
from contract_analyzer.api.routes import extract_submittals
from contract_analyzer.database.exceptions import StoreReadError
from contract_analyzer.extraction.exceptions import (
    ProviderAuthError,
    ProviderNetworkError,
    ProviderQuotaExceededError,
    ProviderRateLimitedError,
)
from contract_analyzer.extraction.models import FIELD_LIST

UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"


class TestHealth:
    def test_reports_provider_model_and_db(self, async_client: TestClient) -> None:
        response = async_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["ai_provider"] == "example"
        assert body["model"] == "example"
        assert body["db"] == "connected"
        assert body["ts"]


class TestLifespan:
    def test_opens_and_closes_database(self, scripted_client: ScriptedClient) -> None:
        container = make_container(scripted_client)

        with TestClient(create_app(container.settings, container)):
            assert container.database.opened

        assert container.database.closed


class TestUploadValidation:
    def test_missing_file(self, async_client: TestClient) -> None:
        response = async_client.post("/api/summarize")

        assert response.status_code == 400
        assert response.json()["code"] == "NO_FILE"

    def test_non_pdf_file(self, async_client: TestClient) -> None:
        response = async_client.post(
            "/api/summarize", files=pdf_upload(b"hello", "notes.txt", "text/plain")
        )

        assert response.status_code == 400
        assert response.json()["code"] == "UNSUPPORTED_FILE_TYPE"

    def test_file_too_large(self, scripted_client: ScriptedClient) -> None:
        container = make_container(scripted_client, max_upload_size_mb=1)
        data = b"%PDF-1.4\n" + b"0" * (1024 * 1024)

        with TestClient(create_app(container.settings, container)) as client:
            response = client.post("/api/summarize", files=pdf_upload(data))

        assert response.status_code == 413
        assert response.json()["code"] == "FILE_TOO_LARGE"
        assert container.contract_repo.records == {}

    def test_unreadable_pdf(self, async_client: TestClient) -> None:
        response = async_client.post("/api/summarize", files=pdf_upload(b"not a pdf"))

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PDF"

    def test_empty_pdf_creates_no_record(
        self,
        async_client: TestClient,
        async_container: AppContainer,
        scripted_client: ScriptedClient,
        empty_pdf_bytes: bytes,
    ) -> None:
        response = async_client.post("/api/summarize", files=pdf_upload(empty_pdf_bytes))

        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_PDF"
        assert async_container.contract_repo.records == {}
        assert async_container.worker.pending_jobs == 0
        assert scripted_client.prompts == []

    def test_empty_pdf_in_sync_mode(
        self, sync_client: TestClient, sync_container: AppContainer, empty_pdf_bytes: bytes
    ) -> None:
        response = sync_client.post("/api/summarize", files=pdf_upload(empty_pdf_bytes))

        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_PDF"
        assert sync_container.contract_repo.records == {}


class TestSyncSummarize:
    def test_returns_completed_record(
        self, sync_client: TestClient, sample_pdf_bytes: bytes
    ) -> None:
        response = sync_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes))

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "completed"
        assert body["pdfName"] == "tender.pdf"
        assert body["fields"]["ClientName"] == "Acme"
        assert all(body["fields"][name] is None for name in FIELD_LIST if name != "ClientName")
        assert body["submittals"] == []

    def test_stored_record_is_readable(
        self, sync_client: TestClient, sample_pdf_bytes: bytes
    ) -> None:
        contract_id = sync_client.post(
            "/api/summarize", files=pdf_upload(sample_pdf_bytes)
        ).json()["_id"]

        fields = sync_client.get(f"/api/summarize/{contract_id}").json()
        submittals = sync_client.get(f"/api/submittals/{contract_id}").json()

        assert fields["fields"]["ClientName"] == "Acme"
        assert fields["status"] == "completed"
        assert submittals == {
            "success": True,
            "submittals": [],
            "pdfName": "tender.pdf",
            "status": "completed",
        }

    def test_sends_extracted_text_to_provider(
        self,
        sync_client: TestClient,
        scripted_client: ScriptedClient,
        sample_pdf_bytes: bytes,
    ) -> None:
        sync_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes))

        assert len(scripted_client.prompts) == 2
        assert "Client: Acme" in scripted_client.prompts[0]
        assert '"submittals"' in scripted_client.prompts[1]


class TestProviderErrors:
    def _post(self, client: ScriptedClient, sample_pdf_bytes: bytes, **settings: object):  # type: ignore[no-untyped-def]
        container = make_container(client, processing_mode="sync", **settings)
        with TestClient(create_app(container.settings, container)) as test_client:
            response = test_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes))
        return response, container

    def test_quota_exceeded(self, sample_pdf_bytes: bytes) -> None:
        response, container = self._post(
            ScriptedClient(error=ProviderQuotaExceededError("quota")), sample_pdf_bytes
        )

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "3600"
        assert response.json()["code"] == "QUOTA_EXCEEDED"
        assert response.json()["retryAfter"] == 3600
        assert container.contract_repo.records == {}

    def test_rate_limited_uses_provider_hint(self, sample_pdf_bytes: bytes) -> None:
        error = ProviderRateLimitedError("slow down", retry_after_seconds=20)
        response, _ = self._post(ScriptedClient(error=error), sample_pdf_bytes)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "20"
        assert response.json()["code"] == "RATE_LIMITED"

    def test_auth_error_includes_details_outside_production(self, sample_pdf_bytes: bytes) -> None:
        response, _ = self._post(
            ScriptedClient(error=ProviderAuthError("bad key")), sample_pdf_bytes
        )

        assert response.status_code == 500
        assert response.json()["code"] == "AUTH_ERROR"
        assert response.json()["details"] == "bad key"

    def test_production_hides_details(self, sample_pdf_bytes: bytes) -> None:
        response, _ = self._post(
            ScriptedClient(error=ProviderNetworkError("socket closed")),
            sample_pdf_bytes,
            app_env="production",
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process PDF", "code": "PROCESSING_ERROR"}

    def test_unparseable_response(self, sample_pdf_bytes: bytes) -> None:
        response, _ = self._post(
            ScriptedClient(fields_response="I found nothing useful."), sample_pdf_bytes
        )

        assert response.status_code == 500
        assert response.json()["code"] == "INVALID_RESPONSE_FORMAT"


class TestAsyncSummarize:
    def test_returns_pending_then_completes(
        self,
        async_client: TestClient,
        async_container: AppContainer,
        sample_pdf_bytes: bytes,
    ) -> None:
        response = async_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes))

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "pending"
        assert body["pdfName"] == "tender.pdf"
        assert body["message"]
        contract_id = body["_id"]

        before = async_client.get(f"/api/status/{contract_id}").json()
        assert before["status"] in ("pending", "processing")
        assert before["hasFields"] is False

        async_container.worker.run(max_jobs=1)

        after = async_client.get(f"/api/status/{contract_id}").json()
        assert after == {
            "success": True,
            "_id": contract_id,
            "pdfName": "tender.pdf",
            "status": "completed",
            "errorMessage": None,
            "hasFields": True,
            "hasSubmittals": False,
        }
        fields = async_client.get(f"/api/summarize/{contract_id}").json()["fields"]
        assert fields["ClientName"] == "Acme"

    def test_background_failure_marks_record_failed(
        self,
        async_client: TestClient,
        async_container: AppContainer,
        scripted_client: ScriptedClient,
        sample_pdf_bytes: bytes,
    ) -> None:
        scripted_client.error = ProviderNetworkError("AI provider network error: down")
        contract_id = async_client.post(
            "/api/summarize", files=pdf_upload(sample_pdf_bytes)
        ).json()["_id"]

        async_container.worker.run(max_jobs=1)

        status = async_client.get(f"/api/status/{contract_id}").json()
        assert status["status"] == "failed"
        assert "down" in status["errorMessage"]
        assert status["hasFields"] is False


class TestNotFound:
    def test_unknown_id_status(self, async_client: TestClient) -> None:
        response = async_client.get(f"/api/status/{UNKNOWN_ID}")

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    def test_unknown_id_fields_and_submittals(self, async_client: TestClient) -> None:
        assert async_client.get(f"/api/summarize/{UNKNOWN_ID}").status_code == 404
        assert async_client.get(f"/api/submittals/{UNKNOWN_ID}").status_code == 404
        assert async_client.post(f"/api/submittals/{UNKNOWN_ID}").status_code == 404

    def test_unknown_route(self, async_client: TestClient) -> None:
        assert async_client.get("/api/nothing-here").status_code == 404


class TestHistory:
    def test_lists_newest_first(
        self, sync_client: TestClient, sample_pdf_bytes: bytes
    ) -> None:
        sync_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes, "first.pdf"))
        sync_client.post("/api/summarize", files=pdf_upload(sample_pdf_bytes, "second.pdf"))

        body = sync_client.get("/api/history").json()

        assert body["success"] is True
        assert [f["pdfName"] for f in body["files"]] == ["second.pdf", "first.pdf"]
        assert set(body["files"][0]) == {"_id", "pdfName", "createdAt", "status"}

    def test_empty_history(self, async_client: TestClient) -> None:
        assert async_client.get("/api/history").json() == {"success": True, "files": []}

    def test_read_failure_returns_json_error(self, scripted_client: ScriptedClient) -> None:
        container = make_container(scripted_client)
        container.contract_repo.list_summaries = MagicMock(
            side_effect=StoreReadError("Failed to list contracts: connection refused")
        )

        with TestClient(create_app(container.settings, container)) as client:
            response = client.get("/api/history")

        assert response.status_code == 500
        assert response.json()["code"] == "STORE_ERROR"
        assert response.json()["error"] == "Failed to load contract"


class TestSubmittalsOnDemand:
    def test_requires_pdf_when_not_cached(
        self, sync_client: TestClient, sample_pdf_bytes: bytes
    ) -> None:
        contract_id = sync_client.post(
            "/api/summarize", files=pdf_upload(sample_pdf_bytes)
        ).json()["_id"]

        response = sync_client.post(f"/api/submittals/{contract_id}")

        assert response.status_code == 400
        assert response.json()["code"] == "NO_FILE"

    def test_extracts_stores_then_serves_cache(
        self,
        sync_client: TestClient,
        scripted_client: ScriptedClient,
        sample_pdf_bytes: bytes,
    ) -> None:
        contract_id = sync_client.post(
            "/api/summarize", files=pdf_upload(sample_pdf_bytes)
        ).json()["_id"]
        scripted_client.submittals_response = (
            '{"submittals": [{"item": "Bid Security", "page": 1, "reason": "Mandatory"}]}'
        )

        first = sync_client.post(
            f"/api/submittals/{contract_id}", files=pdf_upload(sample_pdf_bytes)
        )
        calls_after_first = len(scripted_client.prompts)
        second = sync_client.post(f"/api/submittals/{contract_id}")

        expected = [{"item": "Bid Security", "page": 1, "reason": "Mandatory"}]
        assert first.json() == {"success": True, "submittals": expected}
        assert second.json() == {"success": True, "submittals": expected}
        assert len(scripted_client.prompts) == calls_after_first
        stored = sync_client.get(f"/api/submittals/{contract_id}").json()
        assert stored["submittals"] == expected


    def test_nameless_part_is_closed_and_treated_as_no_file(self) -> None:
        spool = io.BytesIO(b"")
        request = MagicMock()
        processor = request.app.state.container.processor
        processor.submittals_for.return_value = []

        result = extract_submittals(UNKNOWN_ID, request, UploadFile(file=spool, filename=""))

        assert result == {"success": True, "submittals": []}
        processor.submittals_for.assert_called_once_with(UNKNOWN_ID, None, None)
        assert spool.closed


class TestCors:
    def test_allows_configured_origin(self, async_client: TestClient) -> None:
        response = async_client.options(
            "/api/history",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
