import pytest

from core.errors import AuthorizationError
from core.security import verify_cron_auth


class TestVerifyCronAuth:
    def test_trusted_scheduler_header(self):
        verify_cron_auth({"x-vercel-cron": "1"}, None, "s3cret")

    def test_no_secret_configured_accepts_anyone(self):
        verify_cron_auth({}, None, None)
        verify_cron_auth({}, "whatever", "")

    def test_secret_header(self):
        verify_cron_auth({"x-cron-secret": "s3cret"}, None, "s3cret")

    def test_secret_query_param(self):
        verify_cron_auth({}, "s3cret", "s3cret")

    @pytest.mark.parametrize("headers, query", [
        ({}, None),
        ({"x-cron-secret": "nope"}, None),
        ({}, "nope"),
        ({"x-vercel-cron": ""}, None),
    ])
    def test_rejected(self, headers, query):
        with pytest.raises(AuthorizationError, match="Unauthorized"):
            verify_cron_auth(headers, query, "s3cret")
