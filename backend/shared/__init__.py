"""
Shared module for code used by the REST API and the CLI.

- shared.security: Authentication and password hashing
  - auth.py: JWT signing and verification, current_user_context
  - password.py: Bcrypt hashing
  - rate_limit.py: Login and registration rate limiting

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: Request correlation IDs

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Statuses, plans, limits, error messages

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: Search pattern helpers
  - schemas.py: Pydantic request and response schemas

IMPORT EXAMPLES:
    from shared.security.auth import current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import OrderStatus, SubscriptionPlan
    from shared.utils.exceptions import NotFoundError, UpgradeRequiredError
"""
