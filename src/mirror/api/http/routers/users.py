"""Users API router: nested reads, single create, cascading and bulk delete."""

import json
import math

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from src.mirror.api.http.deps import get_aggregator, get_user_service
from src.mirror.core.errors import BadRequest, Conflict, NotFound
from src.mirror.core.services import Aggregator, UserService
from src.mirror.entities import User

router = APIRouter(prefix="/users", tags=["users"])


def parse_user_id(raw: str) -> int | float:
    """Parse a path segment as a numeric domain id.

    Integral values come back as ``int`` so they match stored integer ids.

    Raises:
        BadRequest: If the segment is not a finite number
    """
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        raise BadRequest("Invalid userId") from None
    if not math.isfinite(value):
        raise BadRequest("Invalid userId")
    return int(value) if value.is_integer() else value


def parse_user_body(raw: bytes) -> User:
    """Decode a PUT body into a ``User``.

    Raises:
        BadRequest: If the body is not a JSON object, or its ``id`` is missing
            or not a number
    """
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise BadRequest("Invalid JSON or error processing request") from None

    if not isinstance(payload, dict):
        raise BadRequest("Invalid JSON or error processing request")
    if payload.get("id") is None:
        raise BadRequest("Missing user id in request body")

    try:
        return User.model_validate(payload)
    except ValidationError:
        raise BadRequest("Invalid JSON or error processing request") from None


@router.delete("")
async def delete_all_users(
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """Delete every user, post and comment."""
    try:
        await user_service.delete_all()
    except Exception:
        logger.exception("Error deleting users")
        return Response("Error deleting users", status_code=500)
    return Response("All users (and related posts/comments) deleted", status_code=200)


@router.put("")
async def create_user(
    request: Request,
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """Create one user from the JSON request body."""
    try:
        user = parse_user_body(await request.body())
        await user_service.create_user(user)
    except BadRequest as exc:
        return Response(exc.message, status_code=400)
    except Conflict:
        return Response("User already exists", status_code=409)
    except Exception:
        logger.exception("Error creating user")
        return Response("Invalid JSON or error processing request", status_code=400)

    return Response(
        f"User {user.id} created",
        status_code=201,
        headers={"Link": f"/users/{user.id}"},
    )


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    aggregator: Aggregator = Depends(get_aggregator),
) -> Response:
    """Get a user with its posts, each post with its comments."""
    try:
        domain_id = parse_user_id(user_id)
    except BadRequest as exc:
        return Response(exc.message, status_code=400)

    try:
        user_data = await aggregator.get_user_data(domain_id)
    except Exception:
        logger.exception("Error fetching user data")
        return Response("Error fetching user data", status_code=500)

    if user_data is None:
        return JSONResponse({"error": "User not found"}, status_code=404)
    return JSONResponse(user_data.to_document(), status_code=200)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user and cascade to its posts and their comments."""
    try:
        domain_id = parse_user_id(user_id)
    except BadRequest as exc:
        return Response(exc.message, status_code=400)

    try:
        await user_service.delete_user(domain_id)
    except NotFound:
        return Response("User not found", status_code=404)
    except Exception:
        logger.exception("Error deleting user")
        return Response("Error deleting user", status_code=500)

    return Response(
        f"User {domain_id} and associated posts/comments deleted", status_code=200
    )


# An empty id segment is a bad id, not an unknown endpoint
@router.get("/")
@router.delete("/")
async def empty_user_id() -> Response:
    return Response("Invalid userId", status_code=400)
