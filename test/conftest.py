"""Pytest configuration and fixtures

Provides shared fixtures for all tests: sample documents generated with
PyMuPDF at test time, an engine executor, and the registry, manager and
oneshot runner built on it.
"""

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

# Add project root and shared test helpers to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from mupdf_mcp.config import ServerSettings
from mupdf_mcp.logger import ConsoleLogger
from mupdf_mcp.oneshot import OneshotRunner
from mupdf_mcp.sessions import SessionManager, SessionRegistry

from document_factory import build_encrypted_pdf, build_plain_pdf, build_png, build_sample_pdf

# ============================================================================
# DOCUMENT FIXTURES
# ============================================================================


@pytest.fixture(scope="session")
def sample_pdf_bytes() -> bytes:
    return build_sample_pdf()


@pytest.fixture(scope="session")
def plain_pdf_bytes() -> bytes:
    return build_plain_pdf()


@pytest.fixture(scope="session")
def encrypted_pdf_bytes() -> bytes:
    return build_encrypted_pdf()


@pytest.fixture(scope="session")
def empty_user_password_pdf_bytes() -> bytes:
    """Encrypted with an owner password only; opens without a password."""
    return build_encrypted_pdf(user_password="")


@pytest.fixture(scope="session")
def png_bytes() -> bytes:
    return build_png()


@pytest.fixture
def sample_pdf_path(tmp_path, sample_pdf_bytes) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path


@pytest.fixture
def encrypted_pdf_path(tmp_path, encrypted_pdf_bytes) -> Path:
    path = tmp_path / "encrypted.pdf"
    path.write_bytes(encrypted_pdf_bytes)
    return path


# ============================================================================
# SERVER COMPONENT FIXTURES
# ============================================================================


@pytest.fixture
def logger():
    return ConsoleLogger(name="mupdf_mcp.test")


@pytest.fixture
def settings() -> ServerSettings:
    return ServerSettings()


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mupdf-test")
    yield pool
    pool.shutdown(wait=True, cancel_futures=True)


@pytest.fixture
def registry(executor, logger) -> SessionRegistry:
    return SessionRegistry(executor=executor, logger=logger)


@pytest.fixture
def manager(registry, executor, settings, logger) -> SessionManager:
    return SessionManager(registry=registry, executor=executor, settings=settings, logger=logger)


@pytest.fixture
def oneshot_runner(executor, settings, logger) -> OneshotRunner:
    return OneshotRunner(executor=executor, settings=settings, logger=logger)
