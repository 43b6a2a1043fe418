"""Print an admin session token for scripts and API clients.

The token is signed with ``SECRET_KEY``; pass the lifetime in days as
the first argument (default 1).  Send it as ``Authorization: Bearer
<token>`` to the ``/api/v1/admin`` endpoints.
"""
import sys

from event_registration_api.app.core.security import create_session_token

days = int(sys.argv[1]) if len(sys.argv) > 1 else 1
print(create_session_token(expires_delta=days * 24 * 60 * 60))
