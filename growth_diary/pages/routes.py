from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, RedirectResponse

from growth_diary.auth.service import session_user
from growth_diary.core import config

router = APIRouter(tags=["Pages"], include_in_schema=False)

APP_PAGES = ("dashboard", "journal", "goals", "todos", "settings")


def _page(name: str) -> FileResponse:
    return FileResponse(config.PUBLIC_DIR / f"{name}.html", media_type="text/html")


@router.get("/")
def index_page(request: Request):
    if session_user(request) is not None:
        return RedirectResponse("/dashboard", status_code=302)
    return _page("index")


def _make_page_route(name: str):
    def page_route(request: Request):
        if session_user(request) is None:
            return RedirectResponse("/", status_code=302)
        return _page(name)

    page_route.__name__ = f"{name}_page"
    return page_route


for _name in APP_PAGES:
    router.add_api_route(f"/{_name}", _make_page_route(_name), methods=["GET"])
