from fastapi import APIRouter

from infrastructure.api.dependencies import config_dep, storage_dep

router = APIRouter(tags=["debug"])


@router.get("/health")
def health():
    """Backend is up and reachable under /api."""
    return {"status": "ok", "message": "Backend is running"}


@router.get("/debug/storage")
def storage_status(config: config_dep, storage: storage_dep):
    """Which backend is active and whether Airtable credentials are present. Never echoes them."""
    return {
        "hasApiKey": bool(config.airtable_api_key),
        "hasBaseId": bool(config.airtable_base_id),
        "storageType": type(storage).__name__,
    }
