from fastapi import APIRouter

from auth import success_response


router = APIRouter()


@router.get("/healthz")
async def health_check():
    return success_response("Service is running")
