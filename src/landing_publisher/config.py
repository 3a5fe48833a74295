"""Server-side configuration for the publisher."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_ANALYTICS_HOST = "https://us.posthog.com"


class PublisherSettings(BaseModel):
    """Secrets, collaborator endpoints and policy values.

    Attributes:
        publish_secret: Shared secret required from publishing callers
        site_url: Public base URL of the landing site
        revalidate_secret: Secret for the cache revalidation endpoint
        revalidate_timeout: Revalidation request timeout in seconds
        analytics_api_key: Personal API key for analytics URL authorization
        analytics_host: Analytics service base URL
        analytics_project_id: Analytics project identifier
        rest_url: PostgREST base URL; enables the REST page store
        rest_key: Service role key for the REST page store
        store_dir: Directory for the JSON-file page store
        throttle_window: Per-slug publish cooldown in seconds
        throttle_cleanup: Age in seconds after which throttle entries are evicted
        environment: Deployment posture; "development" exposes error details
    """

    publish_secret: str | None = None
    site_url: str = DEFAULT_SITE_URL
    revalidate_secret: str | None = None
    revalidate_timeout: float = Field(default=5.0, gt=0)
    analytics_api_key: str | None = None
    analytics_host: str = DEFAULT_ANALYTICS_HOST
    analytics_project_id: str = "@current"
    rest_url: str | None = None
    rest_key: str | None = None
    store_dir: Path = Path("./workspace/pages")
    throttle_window: float = Field(default=15.0, ge=0)
    throttle_cleanup: float = Field(default=60.0, ge=0)
    environment: str = "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def uses_rest_store(self) -> bool:
        return bool(self.rest_url and self.rest_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "PublisherSettings":
        """Build settings from environment variables.

        Unset or empty variables fall back to the field defaults.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Raises:
            pydantic.ValidationError: If a numeric variable is malformed
        """
        env = os.environ if environ is None else environ
        mapping = {
            "publish_secret": "STUDIO_PUBLISH_SECRET",
            "site_url": "SITE_URL",
            "revalidate_secret": "REVALIDATE_SECRET",
            "revalidate_timeout": "REVALIDATE_TIMEOUT",
            "analytics_api_key": "POSTHOG_PERSONAL_API_KEY",
            "analytics_host": "POSTHOG_HOST",
            "analytics_project_id": "POSTHOG_PROJECT_ID",
            "rest_url": "SUPABASE_URL",
            "rest_key": "SUPABASE_SERVICE_ROLE",
            "store_dir": "LANDING_STORE_DIR",
            "throttle_window": "PUBLISH_THROTTLE_SECONDS",
            "throttle_cleanup": "PUBLISH_THROTTLE_CLEANUP_SECONDS",
            "environment": "APP_ENV",
        }
        values = {field: env[var] for field, var in mapping.items() if env.get(var)}
        return cls.model_validate(values)
