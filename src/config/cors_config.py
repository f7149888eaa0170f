"""CORS configuration for the mobile client and admin dashboard."""

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class CORSConfigurationError(Exception):
    """Raised when CORS configuration is invalid or insecure."""

    pass


def normalize_origin(origin: str) -> str:
    """Strip whitespace and trailing slashes from an origin.

    Raises:
        CORSConfigurationError: If origin is empty or not a URL.

    """
    origin = origin.strip()

    if not origin:
        raise CORSConfigurationError("Origin cannot be empty")

    if origin == "*":
        return origin

    parsed = urlparse(origin)
    if not parsed.scheme or not parsed.netloc:
        raise CORSConfigurationError(f"Invalid origin URL: {origin}")

    return origin.rstrip("/")


def parse_origins(value: str | list[str] | None) -> list[str]:
    """Parse a comma-separated origin list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [normalize_origin(v) for v in value if v.strip()]


class CORSConfiguration:
    """Environment-aware CORS settings.

    The mobile client does not send an Origin header, so development allows
    every origin by default. Staging and production require explicit origins
    for browser clients such as the admin dashboard.
    """

    allow_methods = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    allow_headers = ["authorization", "content-type"]

    def __init__(
        self,
        allow_origins: str | list[str] | None = None,
        allow_credentials: bool = False,
        max_age: int = 600,
        environment: str = "development",
    ):
        self.environment = environment.lower()
        self.allow_credentials = allow_credentials
        self.max_age = max_age

        if allow_origins is None and self.environment == "development":
            self.allow_origins = ["*"]
        else:
            self.allow_origins = parse_origins(allow_origins)

        self._validate_security_rules()

    def _validate_security_rules(self) -> None:
        has_wildcard = "*" in self.allow_origins

        if self.allow_credentials and has_wildcard:
            raise CORSConfigurationError("Cannot enable credentials with wildcard origins (*)")

        if has_wildcard and self.environment != "development":
            raise CORSConfigurationError(f"Wildcard origins (*) are not allowed in {self.environment} environment")

        if self.environment == "production" and not self.allow_origins:
            logger.warning("Production environment has no allowed origins, browser clients will be refused")

    def get_middleware_config(self) -> dict:
        """Get keyword arguments for FastAPI CORSMiddleware."""
        return {
            "allow_origins": self.allow_origins,
            "allow_credentials": self.allow_credentials,
            "allow_methods": self.allow_methods,
            "allow_headers": self.allow_headers,
            "max_age": self.max_age,
        }

    def log_configuration(self) -> None:
        logger.info(
            f"CORS Configuration: environment={self.environment} origins={self.allow_origins} "
            f"credentials={self.allow_credentials} max_age={self.max_age}s"
        )
