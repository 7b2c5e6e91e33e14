"""Tests for credential lookup."""

import json

import bcrypt
import pytest

from bucketgate.app import App
from bucketgate.config import Config
from bucketgate.errors import ConfigurationError


class TestFindCredential:
    def test_exact_match(self, core):
        credential = core.services.credential.find_credential("admin", "secret")

        assert credential is not None
        assert credential.username == "admin"

    def test_wrong_password(self, core):
        assert core.services.credential.find_credential("admin", "wrong") is None

    def test_password_compared_exactly(self, core):
        assert core.services.credential.find_credential("admin", "Secret") is None
        assert core.services.credential.find_credential("admin", "secret ") is None

    def test_unknown_user(self, core):
        assert core.services.credential.find_credential("nobody", "secret") is None

    def test_password_of_other_user(self, core):
        assert core.services.credential.find_credential("admin", "pw") is None


class TestHashedCredential:
    @pytest.fixture
    def credentials_file(self, tmp_path):
        password_hash = bcrypt.hashpw(b"hunter2", bcrypt.gensalt(rounds=4)).decode("utf-8")
        path = tmp_path / "config.json"
        path.write_text(json.dumps([{"username": "ops", "password_hash": password_hash}]))
        return path

    def test_hash_verified(self, core):
        assert core.services.credential.find_credential("ops", "hunter2") is not None
        assert core.services.credential.find_credential("ops", "hunter3") is None


class TestStartupConfiguration:
    def test_missing_credentials_fail_fast(self, tmp_path, content_store):
        config = Config(credentials_path=tmp_path / "missing.json", _env_file=None)
        app = App(config, content_store)

        with pytest.raises(ConfigurationError):
            app.check_configuration()

    def test_credentials_loaded_once(self, config, content_store, credentials_file):
        app = App(config, content_store)
        app.check_configuration()
        credentials_file.unlink()

        # Already loaded, the file is not read again
        app.check_configuration()
