import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration


def init_sentry(dsn: str, environment: str = "dev") -> bool:
    """Initialise Sentry; returns False when no DSN is configured."""
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            # counter drift must reach Sentry as an event
            LoggingIntegration(level=None, event_level="ERROR"),
            FastApiIntegration(),
        ],
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    return True
