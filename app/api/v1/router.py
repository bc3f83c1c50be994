from fastapi import APIRouter
from api.v1.routes.strings import router as strings_router
from api.v1.routes.translations import router as translations_router


# Main v1 router (includes all endpoints)
router = APIRouter()
router.include_router(strings_router)
router.include_router(translations_router)
