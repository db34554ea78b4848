"""
Table-dispatch API endpoint for the stats dashboard.

The dashboard talks to a single URL and selects what it wants with query
parameters, so this router exposes one path per HTTP method:

    GET    ?table=games[&id=N]           all games (newest first) or one game
    GET    ?table=players[&id=N]         season totals per player
    GET    ?table=gameplayers&gameId=N   one game's player lines, ranked
    GET    ?table=playerstats[&id=N][&gameId=N]  raw stat rows
    GET    ?table=init                   seed the store if it is empty
    GET    ?table=regenerate             wipe and reseed the store
    GET    ?table=test                   connectivity/schema report
    POST   ?table=games|players          create (JSON body)
    PUT    ?table=games|players&id=N     update (JSON body)
    DELETE ?table=games|players&id=N     delete (games cascade to their players)
    OPTIONS                              CORS preflight, empty 200

Response Conventions:
- Successful writes: {"success": true, "id": N, "message": "..."}
- Every failure: {"error": "..."} (plus "details" when there are any)
- Failures use HTTP 200 unless settings.strict_status_codes is on, in which
  case the error kind picks the status (404, 409, 400, 502, 503, 500)

Key FastAPI Concepts Used:
- APIRouter: Groups related endpoints together
- Depends(): Dependency injection for database sessions and the seed client
- Request: raw access to the JSON body, so bad bodies get the same error
  shape as everything else instead of FastAPI's 422
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from ...config.settings import settings
from ...database.connection import get_db
from ...ingestion import MockarooClient, populate_initial_data, regenerate_database
from ...services import crud
from ...services.diagnostics import database_report
from ...services.results import Err, ErrorKind, Ok, Result
from ..schemas import GameIn, MutationResponse, PlayerStatIn

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UNCHANGED: 409,
    ErrorKind.VALIDATION: 400,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.CONNECTION: 503,
    ErrorKind.INTERNAL: 500,
}

WRITE_SCHEMAS: dict[str, type[BaseModel]] = {"games": GameIn, "players": PlayerStatIn}
LABELS = {"games": "Game", "players": "Player"}


def get_seed_client_factory() -> Callable[[], MockarooClient]:
    """Dependency returning how to build a seed data client.

    Tests override this to hand out a client backed by httpx.MockTransport.
    """
    return MockarooClient


# ========== RESPONSE HELPERS ==========


def error_response(message: str, kind: ErrorKind = ErrorKind.VALIDATION, details=None) -> JSONResponse:
    return respond(Err.of(kind, message, details))


def respond(result: Result, transform: Callable[[Any], Any] | None = None) -> JSONResponse:
    """Turn a service Result into the wire response."""
    if isinstance(result, Ok):
        value = transform(result.value) if transform else result.value
        return JSONResponse(content=jsonable_encoder(value, by_alias=True, exclude_none=True))

    status_code = STATUS_CODES[result.error.kind] if settings.strict_status_codes else 200
    return JSONResponse(content=result.error.to_payload(), status_code=status_code)


def _parse_id(value: str | None, name: str = "id") -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r}") from None


async def _read_body(request: Request, table: str) -> BaseModel | JSONResponse:
    """Parse and validate the JSON body, or return the error response to send."""
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else None
    except ValueError:
        payload = None
    if not payload:
        return error_response("No data provided")

    try:
        return WRITE_SCHEMAS[table].model_validate(payload)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        return error_response(f"Invalid data: {problems}")


# ========== GET ==========


@router.get("")
async def handle_get(
    table: str | None = Query(None, description="games, players, gameplayers, playerstats, init, regenerate, test"),
    id: str | None = Query(None, description="Record id for single-record reads"),
    gameId: str | None = Query(None, description="Game id for gameplayers/playerstats"),
    db: Session = Depends(get_db),
    seed_client_factory: Callable[[], MockarooClient] = Depends(get_seed_client_factory),
):
    """Read endpoints plus the init/regenerate/test maintenance actions."""
    if not table:
        return error_response("No table specified")
    logger.debug(f"Handling GET for table: {table}")

    try:
        if table == "test":
            return respond(database_report(db))

        if table in ("init", "regenerate"):
            action = populate_initial_data if table == "init" else regenerate_database
            with seed_client_factory() as client:
                return respond(action(db, client))

        if table == "games":
            if id is not None:
                return respond(crud.get_game(db, _parse_id(id)))
            return respond(crud.list_games(db))

        if table == "players":
            if id is not None:
                return respond(crud.get_player(db, _parse_id(id)))
            return respond(crud.list_players(db))

        if table == "gameplayers" and gameId is not None:
            return respond(crud.list_game_players(db, _parse_id(gameId, "gameId")))

        if table == "playerstats":
            if id is not None:
                return respond(crud.get_player_stat(db, _parse_id(id)))
            game_id = _parse_id(gameId, "gameId") if gameId is not None else None
            return respond(crud.list_player_stats(db, game_id))
    except ValueError as e:
        return error_response(str(e))

    return error_response(f"Unknown table specified: {table}")


# ========== POST / PUT / DELETE ==========


@router.post("")
async def handle_post(
    request: Request,
    table: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Create a game or a player stat row from the JSON body."""
    if not table:
        return error_response("No table specified")
    if table not in WRITE_SCHEMAS:
        return error_response(f"Unknown table specified: {table}")

    data = await _read_body(request, table)
    if isinstance(data, JSONResponse):
        return data

    create = crud.create_game if table == "games" else crud.create_player
    label = LABELS[table]
    return respond(
        create(db, data),
        lambda new_id: MutationResponse(id=new_id, message=f"{label} created successfully"),
    )


@router.put("")
async def handle_put(
    request: Request,
    table: str | None = Query(None),
    id: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Replace every field of a game or player stat row."""
    if not table or id is None:
        return error_response("Table or ID not specified")
    if table not in WRITE_SCHEMAS:
        return error_response(f"Unknown table specified: {table}")
    try:
        record_id = _parse_id(id)
    except ValueError as e:
        return error_response(str(e))

    data = await _read_body(request, table)
    if isinstance(data, JSONResponse):
        return data

    update = crud.update_game if table == "games" else crud.update_player
    label = LABELS[table]
    return respond(
        update(db, record_id, data),
        lambda _: MutationResponse(message=f"{label} updated successfully"),
    )


@router.delete("")
async def handle_delete(
    table: str | None = Query(None),
    id: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """Delete a player stat row, or a game together with its player rows."""
    if not table or id is None:
        return error_response("Table or ID not specified")
    if table not in WRITE_SCHEMAS:
        return error_response(f"Unknown table specified: {table}")
    try:
        record_id = _parse_id(id)
    except ValueError as e:
        return error_response(str(e))

    if table == "games":
        return respond(
            crud.delete_game(db, record_id),
            lambda _: MutationResponse(
                message="Game and related player records deleted successfully"
            ),
        )
    return respond(
        crud.delete_player(db, record_id),
        lambda _: MutationResponse(message="Player deleted successfully"),
    )


@router.options("")
async def handle_options():
    """Preflight requests get an empty 200."""
    return Response(status_code=200)
