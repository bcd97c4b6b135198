from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def health():
	"""Liveness probe for the hosting platform."""
	return {"ok": True, "msg": "Street Hunt API running"}
