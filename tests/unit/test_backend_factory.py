"""Unit tests for the backend capability object and its lifecycle."""

import json

import pytest

from gdocs_mcp.backends import BackendContext
from gdocs_mcp.backends import get_backends
from gdocs_mcp.backends import initialize_backends
from gdocs_mcp.backends import reset_backends
from gdocs_mcp.backends.factory import create_backend_context
from gdocs_mcp.backends.google import GoogleDocumentBackend
from gdocs_mcp.backends.google import GoogleDriveFileBackend
from gdocs_mcp.backends.surfer import SurferKeywordBackend
from gdocs_mcp.config import Settings
from gdocs_mcp.exceptions import AuthenticationError
from gdocs_mcp.exceptions import BackendNotReadyError
from gdocs_mcp.exceptions import ConfigurationError
from tests.shared.fakes import FakeDocumentBackend
from tests.shared.fakes import FakeFileBackend
from tests.shared.fakes import FakeKeywordBackend


class TestBackendContext:
    def test_keywords_built_once(self):
        calls = []

        def factory():
            calls.append(1)
            return FakeKeywordBackend()

        context = BackendContext(FakeDocumentBackend(), FakeFileBackend(), keyword_factory=factory)

        assert context.keywords is context.keywords
        assert calls == [1]

    def test_keywords_without_factory(self):
        context = BackendContext(FakeDocumentBackend(), FakeFileBackend())

        with pytest.raises(BackendNotReadyError):
            context.keywords


class TestLifecycle:
    def test_not_ready_before_initialize(self):
        with pytest.raises(BackendNotReadyError) as exc_info:
            get_backends()

        assert exc_info.value.error_code == "BACKEND_NOT_READY"

    def test_initialize_with_context(self):
        context = BackendContext(FakeDocumentBackend(), FakeFileBackend())

        assert initialize_backends(Settings(), context) is context
        assert get_backends() is context

    def test_reset(self):
        initialize_backends(Settings(), BackendContext(FakeDocumentBackend(), FakeFileBackend()))
        reset_backends()

        with pytest.raises(BackendNotReadyError):
            get_backends()


class TestCreateBackendContext:
    def test_builds_google_backends(self, mocker):
        authorize = mocker.patch("gdocs_mcp.auth.authorize", return_value=mocker.Mock())
        build = mocker.patch("gdocs_mcp.backends.google.build")
        settings = Settings()

        context = create_backend_context(settings)

        authorize.assert_called_once_with(settings.credentials_path, settings.token_path)
        assert isinstance(context.documents, GoogleDocumentBackend)
        assert isinstance(context.files, GoogleDriveFileBackend)
        assert [c.args[:2] for c in build.call_args_list] == [("docs", "v1"), ("drive", "v3")]

    def test_missing_surfer_key_only_fails_keywords(self, mocker):
        mocker.patch("gdocs_mcp.auth.authorize", return_value=mocker.Mock())
        mocker.patch("gdocs_mcp.backends.google.build")

        context = create_backend_context(Settings())

        with pytest.raises(ConfigurationError):
            context.keywords

    def test_surfer_backend_from_config_file(self, mocker, tmp_path):
        mocker.patch("gdocs_mcp.auth.authorize", return_value=mocker.Mock())
        mocker.patch("gdocs_mcp.backends.google.build")
        config = tmp_path / "surfer.json"
        config.write_text(json.dumps({"api_key": "k"}), encoding="utf-8")

        context = create_backend_context(Settings(surfer_config_path=str(config)))

        assert isinstance(context.keywords, SurferKeywordBackend)

    def test_authentication_failure_propagates(self, mocker):
        mocker.patch("gdocs_mcp.auth.authorize", side_effect=AuthenticationError("no token"))

        with pytest.raises(AuthenticationError):
            create_backend_context(Settings())
