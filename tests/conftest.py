"""Pytest configuration and fixtures for CodeProbe CLI tests."""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

# Keep the developer's own ~/.codeprobe/config.toml out of the scanner limits,
# which are read once when codeprobe_cli.config is first imported.
os.environ["CODEPROBE_HOME"] = tempfile.mkdtemp(prefix="codeprobe-home-")

import pytest


SHOP_JAVA = Path("src", "main", "java", "com", "example", "shop")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def shop_project_path() -> Path:
    """Checked-in two-module Maven project (shop-api, shop-core)."""
    return (Path(__file__).parent / "fixtures" / "shop_project").resolve()


@pytest.fixture
def shop_file(shop_project_path: Path) -> Callable[[str, str], str]:
    """Absolute path of a source file inside one of the shop modules."""

    def _path(module: str, relative: str) -> str:
        return str(shop_project_path / module / SHOP_JAVA / relative)

    return _path


@pytest.fixture
def write_file(temp_dir: Path) -> Callable[[str, str], Path]:
    """Write *content* to *relative* under the temporary directory."""

    def _write(relative: str, content: str) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_java_code() -> str:
    """Small Spring-style service used by outline and block tests."""
    return '''package com.acme.billing;

import java.util.List;

/**
 * Issues invoices.
 */
@Service
public class InvoiceService {

    private InvoiceRepository invoiceRepository;

    @Transactional
    @Deprecated
    public Invoice issue(Long orderId) {
        if (orderId != null) {
            invoiceRepository.lock(orderId);
        }
        return invoiceRepository.save(orderId);
    }

    public interface Listener {
        void onIssued(Invoice invoice);
    }
}
'''
