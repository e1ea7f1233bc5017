import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dexview.config import get_settings
from dexview.dependencies import close_poke_client, get_pokemon_service
from dexview.models import ApiResponse, ErrorResponse, PokemonDetail, PokemonPage, TypeDescriptor, TypePage
from dexview.services.pokemon_service import PokemonService
from dexview.views import render_error, router as views_router

logging.basicConfig(level=get_settings().log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_poke_client()


app = FastAPI(
    title="dexview",
    description="Aggregates PokeAPI pokemon and species data into display-ready JSON and HTML.",
    lifespan=lifespan,
)


# NotFoundError and FetchFailure are HTTPExceptions, so they land here as well.
# /api callers get the JSON envelope, everything else gets the HTML error page.
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith("/api"):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
        )
    return render_error(request, exc.status_code, str(exc.detail))


@app.get("/health", summary="Liveness check")
async def health_check():
    return {"status": "ok"}


@app.get(
    "/api/pokemon",
    response_model=ApiResponse[PokemonPage],
    summary="Returns one page of Pokemon summaries",
)
async def list_pokemon(
    page: str | None = None,
    limit: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    """Invalid or missing page/limit values fall back to the defaults instead of failing."""
    return ApiResponse(data=await service.list_page(page, limit))


# Declared before /api/pokemon/{name_or_id} so 'search' is not taken as a name
@app.get(
    "/api/pokemon/search",
    response_model=ApiResponse[PokemonPage],
    summary="Exact lookup with substring fallback",
)
async def search_pokemon(
    q: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    return ApiResponse(data=await service.search(q))


@app.get(
    "/api/pokemon/{name_or_id}",
    response_model=ApiResponse[PokemonDetail],
    summary="Returns the merged Pokemon + species record",
)
async def get_pokemon(
    name_or_id: str,
    service: PokemonService = Depends(get_pokemon_service),
):
    detail = await service.get_details(name_or_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pokemon '{name_or_id}' not found.")
    return ApiResponse(data=detail)


@app.get(
    "/api/types",
    response_model=ApiResponse[list[TypeDescriptor]],
    summary="Returns the gameplay types",
)
async def list_types(service: PokemonService = Depends(get_pokemon_service)):
    return ApiResponse(data=await service.list_types())


@app.get(
    "/api/types/{type_name}",
    response_model=ApiResponse[TypePage],
    summary="Returns one page of Pokemon of the given type",
)
async def list_pokemon_by_type(
    type_name: str,
    page: str | None = None,
    limit: str | None = None,
    service: PokemonService = Depends(get_pokemon_service),
):
    result = await service.list_by_type(type_name, page, limit)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Type '{type_name}' not found.")
    return ApiResponse(data=result)


app.include_router(views_router)
