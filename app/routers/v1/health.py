from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/assignments/health")
async def health_check(request: Request):
    # liveness: non tocca Mongo
    return {"status": "ok", "service": request.app.title, "version": request.app.version}
