"""
Server-rendered HTML pages.

Every page is a thin wrapper over one PokemonService call. Missing pokemon or
types raise a 404 HTTPException, which the app-level handler turns into the
error page via ``render_error``.
"""
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dexview.dependencies import get_pokemon_service
from dexview.services.pokemon_service import PokemonService

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

router = APIRouter(tags=["views"], default_response_class=HTMLResponse)


def render_error(request: Request, status_code: int, message: str) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": status_code, "message": message},
        status_code=status_code,
    )


@router.get("/")
async def home(
    request: Request,
    page: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    result = await service.list_page(page)
    types = await service.list_types()
    return templates.TemplateResponse(
        request,
        "index.html",
        {"result": result, "types": types, "title": "All Pokemon", "base_path": "/"},
    )


@router.get("/search")
async def search(
    request: Request,
    q: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    result = await service.search(q)
    types = await service.list_types()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "result": result,
            "types": types,
            "title": f"Results for \"{q}\"" if q and q.strip() else "Search",
            "query": q or "",
            "base_path": None,
        },
    )


@router.get("/pokemon/{name_or_id}")
async def pokemon_detail(
    request: Request,
    name_or_id: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    pokemon = await service.get_details(name_or_id)
    if pokemon is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pokemon '{name_or_id}' not found.")
    return templates.TemplateResponse(request, "detail.html", {"pokemon": pokemon})


@router.get("/type/{type_name}")
async def pokemon_by_type(
    request: Request,
    type_name: str,
    page: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    result = await service.list_by_type(type_name, page)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Type '{type_name}' not found.")
    types = await service.list_types()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "result": result,
            "types": types,
            "title": f"{result.type_display_name} Pokemon",
            "active_type": result.type,
            "base_path": f"/type/{result.type}",
        },
    )
