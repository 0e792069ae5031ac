"""
Portfolio API - File Service Unit Tests
========================================

What:  Tests for upload validation, naming, storage and cleanup.
How:   Each test gets a FileService rooted in pytest's tmp_path.
"""

import re
from pathlib import Path
from unittest.mock import patch

import pytest

from portfolio_api.exceptions import ValidationError
from portfolio_api.services.file_service import FileService


class TestUploadValidation:
    """Extension and size checks."""

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.service = FileService(upload_dir=str(tmp_path / "uploads"))

    def test_extension_is_lowercased(self):
        assert self.service.validate_extension("Slides.PDF") == ".pdf"

    def test_extension_keeps_last_suffix(self):
        assert self.service.validate_extension("archive.tar.gz") == ".gz"

    def test_no_extension_is_allowed(self):
        assert self.service.validate_extension("README") == ""

    def test_extension_with_symbols_rejected(self):
        with pytest.raises(ValidationError, match="not allowed"):
            self.service.validate_extension("evil.p$p")

    def test_empty_file_rejected(self):
        with pytest.raises(ValidationError, match="empty"):
            self.service.validate_size(0)

    def test_oversized_file_rejected(self):
        with patch("portfolio_api.services.file_service.settings") as mock_settings:
            mock_settings.max_upload_size = 1024
            with pytest.raises(ValidationError, match="too large"):
                self.service.validate_size(1025)

    def test_size_at_limit_accepted(self):
        with patch("portfolio_api.services.file_service.settings") as mock_settings:
            mock_settings.max_upload_size = 1024
            self.service.validate_size(1024)


class TestUploadNaming:

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.service = FileService(upload_dir=str(tmp_path))

    def test_name_format(self):
        name = self.service.generate_name(".pdf")
        assert re.fullmatch(r"\d{13}-[0-9a-f]{8}\.pdf", name)

    def test_same_millisecond_names_differ(self):
        with patch("portfolio_api.services.file_service.time.time", return_value=1718035200.123):
            names = {self.service.generate_name(".pdf") for _ in range(50)}
        assert len(names) == 50
        assert all(name.startswith("1718035200123-") for name in names)


class TestStorage:

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.upload_dir = tmp_path / "uploads"
        self.service = FileService(upload_dir=str(self.upload_dir))

    @pytest.mark.asyncio
    async def test_validate_and_store_writes_content(self, sample_pdf_bytes):
        absolute_path, url = await self.service.validate_and_store("cv.pdf", sample_pdf_bytes)

        assert url.startswith("/uploads/")
        assert url.endswith(".pdf")
        assert Path(absolute_path).parent == self.upload_dir.resolve()
        assert Path(absolute_path).read_bytes() == sample_pdf_bytes

    @pytest.mark.asyncio
    async def test_store_does_not_use_client_filename(self, sample_pdf_bytes):
        _, url = await self.service.validate_and_store("../../etc/passwd.txt", sample_pdf_bytes)
        assert ".." not in url
        assert "passwd" not in url

    def test_path_for_url_roundtrip(self):
        path = self.service.path_for_url("/uploads/1718035200123-abcdef12.pdf")
        assert path == self.upload_dir.resolve() / "1718035200123-abcdef12.pdf"

    @pytest.mark.parametrize(
        "url",
        [None, "", "/uploads/", "/uploads/../secret", "/uploads/a/b.pdf", "/static/x.pdf", "https://cdn/x.pdf"],
    )
    def test_path_for_url_rejects_foreign_urls(self, url):
        assert self.service.path_for_url(url) is None

    @pytest.mark.asyncio
    async def test_remove_upload_deletes_file(self, sample_pdf_bytes):
        absolute_path, url = await self.service.validate_and_store("cv.pdf", sample_pdf_bytes)
        await self.service.remove_upload(url)
        assert not Path(absolute_path).exists()

    @pytest.mark.asyncio
    async def test_remove_upload_ignores_missing_file(self):
        await self.service.remove_upload("/uploads/1718035200123-00000000.pdf")

    @pytest.mark.asyncio
    async def test_cleanup_file_nonexistent(self, tmp_path):
        await self.service.cleanup_file(str(tmp_path / "nonexistent.pdf"))
