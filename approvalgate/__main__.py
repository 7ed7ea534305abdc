"""Run the admission webhook server."""

import uvicorn

from approvalgate.core.config import get_settings


def main():
    """Main entry point for the webhook server."""
    settings = get_settings()

    options = {}
    if settings.tls_enabled:
        options["ssl_certfile"] = settings.tls_cert_file
        options["ssl_keyfile"] = settings.tls_key_file

    uvicorn.run(
        "approvalgate.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=(settings.log_level or "info").lower(),
        **options,
    )


if __name__ == "__main__":
    main()
