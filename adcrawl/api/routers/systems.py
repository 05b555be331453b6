from fastapi import APIRouter, HTTPException


def create_systems_router(container_env: dict, browser_session):
    """Create systems router with access to container environment config."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        if not browser_session.is_alive:
            raise HTTPException(status_code=503, detail="browser connection unavailable")
        return {"status": "ok"}

    @router.get("/config")
    def get_config():
        """Return current environment configuration values."""
        return {
            "environment": {
                key: str(value) if value is not None else None
                for key, value in container_env.items()
            }
        }

    return router
