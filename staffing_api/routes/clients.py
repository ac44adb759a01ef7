"""
/clients -- the people hiring providers.

Unauthenticated. Besides the generic CRUD routes this router hosts the two
flows that hand out bearer tokens:

POST /clients/registro  -- create a client and issue a token for it
POST /clients/login     -- find a client by email and issue a fresh token

Login only matches on email. No password (or any other secret field) is
compared, so anyone who knows a client's email can obtain a token for it.
That is how the service has always behaved and it is kept as-is until the
intended login contract is settled.
"""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from staffing_api.errors import NotFound
from staffing_api.models.schemas import LoginRequest, LoginResponse, RegistrationResponse
from staffing_api.routes.resources import add_crud_routes, not_found, store_dependency
from staffing_api.store import CollectionStore
from staffing_api.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients")

clients_store = store_dependency("clients")


@router.post(
    "/registro",
    response_model=RegistrationResponse,
    status_code=201,
    summary="Register a client and get a token",
    tags=["Clients"],
)
async def register(
    fields: dict[str, Any] = Body(examples=[{"name": "Ana", "email": "a@x.com", "password": "..."}]),
    store: CollectionStore = Depends(clients_store),
    tokens: TokenService = Depends(get_token_service),
) -> RegistrationResponse:
    client = await asyncio.to_thread(store.create, fields)
    credential = tokens.issue(client["id"], client.get("name"))

    return RegistrationResponse(
        client=client,
        token=credential.token,
        token_type=credential.token_type,
        expires_at=credential.expires_at,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in by email and get a fresh token",
    description="Looks the client up by email. No password check is performed.",
    tags=["Clients"],
    responses={404: {"description": "No client with that email"}},
)
async def login(
    body: LoginRequest,
    store: CollectionStore = Depends(clients_store),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    try:
        client = await asyncio.to_thread(store.find_by, "email", body.email)
    except NotFound as e:
        raise not_found(e)

    credential = tokens.issue(client["id"], client.get("name"))
    logger.info("Client %s logged in", client["id"])

    return LoginResponse(
        message="Login successful",
        token=credential.token,
        token_type=credential.token_type,
        expires_at=credential.expires_at,
    )


add_crud_routes(router, "clients", "Clients")
