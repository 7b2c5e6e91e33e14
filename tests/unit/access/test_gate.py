"""Tests for the access gate policy."""

import pytest

from bucketgate.core.modules.access.models import GateDecision
from bucketgate.core.modules.access.service import accepts_json, classify

PROTECTED_PATHS = ["/files", "/upload", "/download/1700000000000-a.txt", "/delete/key", "/other"]


class TestClassify:
    @pytest.mark.parametrize("path", ["/login", "/do-login", "/logout", "/health"])
    @pytest.mark.parametrize("wants_json", [True, False])
    def test_auth_flow_paths_always_allowed(self, path, wants_json):
        assert classify(path, is_authenticated=False, wants_json=wants_json) == GateDecision.ALLOW

    @pytest.mark.parametrize("path", ["/static/app.css", "/assets/logo.png", "/public/x.js", "/api/anything"])
    def test_public_prefixes_allowed(self, path):
        assert classify(path, is_authenticated=False, wants_json=True) == GateDecision.ALLOW

    def test_prefix_requires_trailing_slash(self):
        assert classify("/staticfile", is_authenticated=False, wants_json=True) == GateDecision.UNAUTHORIZED

    @pytest.mark.parametrize("path", ["/", "/index.html"])
    @pytest.mark.parametrize("wants_json", [True, False])
    def test_home_redirects_when_anonymous(self, path, wants_json):
        assert classify(path, is_authenticated=False, wants_json=wants_json) == GateDecision.REDIRECT_LOGIN

    @pytest.mark.parametrize("path", PROTECTED_PATHS)
    def test_protected_path_json_is_unauthorized(self, path):
        assert classify(path, is_authenticated=False, wants_json=True) == GateDecision.UNAUTHORIZED

    @pytest.mark.parametrize("path", PROTECTED_PATHS)
    def test_protected_path_browser_redirects(self, path):
        assert classify(path, is_authenticated=False, wants_json=False) == GateDecision.REDIRECT_LOGIN

    @pytest.mark.parametrize("path", ["/", "/index.html", *PROTECTED_PATHS])
    def test_authenticated_allowed(self, path):
        assert classify(path, is_authenticated=True, wants_json=True) == GateDecision.ALLOW


class TestAcceptsJson:
    @pytest.mark.parametrize(
        ("accept", "expected"),
        [
            ("application/json", True),
            ("text/html, application/json;q=0.9", True),
            ("text/html", False),
            ("*/*", False),
            (None, False),
        ],
    )
    def test_accepts_json(self, accept, expected):
        assert accepts_json(accept) is expected


class TestAccessService:
    async def test_check_request_uses_session(self, core):
        session = await core.services.session.login("admin", "secret")

        assert await core.services.access.check_request("/files", session.token, "application/json") == GateDecision.ALLOW
        assert await core.services.access.check_request("/files", None, "application/json") == GateDecision.UNAUTHORIZED
        assert await core.services.access.check_request("/files", None, "text/html") == GateDecision.REDIRECT_LOGIN
