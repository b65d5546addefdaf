import secrets
from typing import Mapping, Optional

from core.errors import AuthorizationError

# Set by the Vercel scheduler on cron invocations
TRUSTED_CRON_HEADER = "x-vercel-cron"
CRON_SECRET_HEADER = "x-cron-secret"


def verify_cron_auth(
    headers: Mapping[str, str],
    query_secret: Optional[str],
    expected_secret: Optional[str]
) -> None:
    """Check that the caller may trigger the reminder job.

    The trusted scheduler header is accepted as is. Otherwise the secret from
    the ``x-cron-secret`` header or the ``secret`` query parameter must match
    the configured one. With no secret configured every caller is accepted.

    Raises:
        AuthorizationError: the secret is missing or wrong
    """
    if headers.get(TRUSTED_CRON_HEADER):
        return

    if not expected_secret:
        return

    got = headers.get(CRON_SECRET_HEADER) or query_secret or ""
    if not secrets.compare_digest(got.encode("utf-8"), expected_secret.encode("utf-8")):
        raise AuthorizationError("Unauthorized")
