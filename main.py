"""API entry point."""

from eventboard.config.environment import IS_PRODUCTION_ENVIRONMENT

if __name__ == "__main__":
    import uvicorn

    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - single process with hot-reload
        uvicorn.run(
            "eventboard.api.app:create_application",
            factory=True,
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - each worker builds its own app and database pool
        uvicorn.run(
            "eventboard.api.app:create_application",
            factory=True,
            host="0.0.0.0",
            port=8000,
            reload=False,
            workers=4,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
