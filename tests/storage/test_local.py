import pytest

from eventra.storage.local import LocalStorage


class TestLocalStorage:
    def test_creates_base_dir(self, tmp_path):
        base = tmp_path / "nested" / "invoices"
        LocalStorage(str(base))
        assert base.is_dir()

    def test_save_and_get(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        path = storage.save("invoices/abc.pdf", b"%PDF-data")

        assert path == str((tmp_path / "invoices" / "abc.pdf").resolve())
        assert storage.get("invoices/abc.pdf") == b"%PDF-data"

    def test_save_overwrites(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        storage.save("a.pdf", b"one")
        storage.save("a.pdf", b"two")
        assert storage.get("a.pdf") == b"two"

    def test_get_url_is_absolute_path(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        assert storage.get_url("x/y.pdf") == str((tmp_path / "x" / "y.pdf").resolve())

    def test_get_missing_raises(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        with pytest.raises(FileNotFoundError):
            storage.get("missing.pdf")

    @pytest.mark.parametrize("key", ["../escape.pdf", "a/../../escape.pdf"])
    def test_rejects_keys_outside_base(self, tmp_path, key):
        storage = LocalStorage(str(tmp_path / "base"))
        with pytest.raises(ValueError, match="escapes"):
            storage.save(key, b"x")
