"""
Issue a token for a fixture user without going through HTTP. Run from project root:
  python -m rbac_api.scripts.issue_token USER_ID
Example:
  curl -X DELETE localhost:3000/posts/1 \
    -H "Authorization: Bearer $(python -m rbac_api.scripts.issue_token u2)"
"""
import argparse
import logging
import sys

from rbac_api.core.config import get_settings
from rbac_api.core.errors import ApiError
from rbac_api.services.auth import TokenIssuer
from rbac_api.services.repository import load_users

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print a signed access token for a user id.")
    parser.add_argument("user_id", help="User ID from the user store, e.g. u1")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s %(message)s")
    settings = get_settings()
    issuer = TokenIssuer(settings, load_users(settings.USERS_FILE))
    try:
        issued = issuer.issue(args.user_id)
    except ApiError as e:
        print(f"{e.error}: {e.message}", file=sys.stderr)
        return 1
    logger.info("Issued token for %s (%s)", issued.user.id, issued.user.role.value)
    print(issued.token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
