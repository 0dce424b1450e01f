from bizcrm.api import upload


def test_stored_file_name_keeps_stem_and_extension():
    assert upload.stored_file_name("report.final.pdf", now_ms=1700000000000) == "1700000000000_report.final.pdf"


def test_stored_file_name_without_extension():
    assert upload.stored_file_name("README", now_ms=5) == "5_README"


def test_stored_file_name_drops_directories():
    assert upload.stored_file_name("../../etc/passwd", now_ms=1) == "1_passwd"


def test_resolve_upload_path_ignores_traversal(monkeypatch, tmp_path):
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path))
    assert upload.resolve_upload_path("/uploads/../../secret.txt") == tmp_path / "secret.txt"
