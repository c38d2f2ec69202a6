from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the relay.")
async def health_check(request: Request):
    return {"status": "healthy", "provider": request.app.state.settings.ai_provider}
