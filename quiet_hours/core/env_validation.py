"""
Runtime Environment Validation Module

Validates the environment at application startup. If validation fails, the
application refuses to start (exit code 1) instead of failing on the first
request that touches the database or signs a token.
"""

import sys

from pydantic import ValidationError

from quiet_hours.core.config import Settings

MIN_SECRET_LENGTH = 32


def validate_environment() -> Settings:
    """
    Validate all required environment variables at startup.

    Returns:
        Settings: Validated settings object

    Raises:
        SystemExit: If validation fails (exit code 1)
    """
    try:
        settings = Settings()
    except ValidationError as e:
        print("❌ FATAL: Environment validation failed", file=sys.stderr)
        print("\nMissing or invalid environment variables:", file=sys.stderr)
        for error in e.errors():
            field = " -> ".join(str(loc) for loc in error["loc"])
            print(f"   • {field}: {error['msg']}", file=sys.stderr)
        print("\nPlease check your .env file or environment variables.", file=sys.stderr)
        sys.exit(1)

    # Development conveniences are only allowed with DEBUG=true
    if not settings.debug:
        if "*" in settings.cors_origins:
            print(
                "❌ FATAL: Wildcard CORS origin (*) detected in production mode.",
                file=sys.stderr,
            )
            print("   Set ALLOWED_ORIGINS to specific domains (comma-separated).", file=sys.stderr)
            sys.exit(1)

        if len(settings.jwt_secret_key) < MIN_SECRET_LENGTH:
            print(
                f"❌ FATAL: JWT_SECRET_KEY must be at least {MIN_SECRET_LENGTH} characters in production mode.",
                file=sys.stderr,
            )
            sys.exit(1)

        if not settings.database_url.startswith("postgresql"):
            print(
                "❌ FATAL: DATABASE_URL must be a PostgreSQL connection string (postgresql+asyncpg://)",
                file=sys.stderr,
            )
            sys.exit(1)

    return settings


if __name__ == "__main__":
    validate_environment()
    print("✅ All environment variables are valid!")
