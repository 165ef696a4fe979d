# backend/tugas/api/endpoints/web/pages.py
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter(tags=["Pages"])


def _page(request: Request, filename: str) -> FileResponse:
    path = Path(request.app.state.settings.PAGES_DIR) / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path)


@router.get("/", include_in_schema=False)
async def home(request: Request):
    return _page(request, "halo.html")


# the SPA still links here; the login form lives in register.html
@router.get("/login/login.html", include_in_schema=False)
async def legacy_login(request: Request):
    return _page(request, "register.html")
