"""The pytest configuration for Google Docs MCP testing.

Every test starts with fresh settings and no installed backends. Tests that
exercise tools install fake backends through the ``backends`` fixture.
"""

import pytest

from gdocs_mcp.backends import BackendContext
from gdocs_mcp.backends import initialize_backends
from gdocs_mcp.backends import reset_backends
from gdocs_mcp.config import get_settings
from gdocs_mcp.config import reset_settings
from tests.shared.fakes import FakeDocumentBackend
from tests.shared.fakes import FakeFileBackend
from tests.shared.fakes import FakeKeywordBackend


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Point configuration at an empty temp dir and reset singletons."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MCP_METRICS_ENABLED", "false")
    monkeypatch.setenv("CREDENTIALS_PATH", str(tmp_path / "credentials.json"))
    monkeypatch.setenv("TOKEN_PATH", str(tmp_path / "token.json"))
    monkeypatch.setenv("SURFER_CONFIG_PATH", str(tmp_path / "surfer-config.json"))
    monkeypatch.delenv("SURFER_API_KEY", raising=False)
    reset_settings()
    reset_backends()
    yield
    reset_settings()
    reset_backends()


@pytest.fixture
def document_backend():
    return FakeDocumentBackend()


@pytest.fixture
def file_backend():
    return FakeFileBackend()


@pytest.fixture
def keyword_backend():
    return FakeKeywordBackend()


@pytest.fixture
def backends(document_backend, file_backend, keyword_backend):
    """Install fake backends as the process-wide backend context."""
    context = BackendContext(
        documents=document_backend,
        files=file_backend,
        keyword_factory=lambda: keyword_backend,
    )
    return initialize_backends(get_settings(), context)


# Custom markers for pytest
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "filterwarnings",
        "ignore:shutdown can only be called once:UserWarning",
    )
