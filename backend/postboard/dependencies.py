"""
Postboard Backend — Request Dependencies
==========================================

What:  FastAPI dependencies shared by the route groups.
Why:   Everything a handler needs (settings, session, caller, parsed body)
       arrives through Depends(), so nothing is read from module globals at
       request time.

    get_settings       → the Settings the app was created with
    get_db_session     → one AsyncSession per request (database.py)
    get_current_user   → the User behind `Authorization: Bearer <token>`,
                         or UnauthorizedError (short-circuits the route)
    json_or_form(M)    → the request body as model M, sent either as JSON or
                         as application/x-www-form-urlencoded
"""

from typing import Any, Callable, Dict, Optional, Type, TypeVar

import pydantic
from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.config import Settings
from postboard.database import get_db_session
from postboard.exceptions import UnauthorizedError
from postboard.models.user import User
from postboard.services.user_service import user_service

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

# auto_error=False: a missing header goes through our error layer instead of
# FastAPI's default 403 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(message="Missing bearer token")
    return await user_service.resolve_token(db, credentials.credentials, settings)


# ── Request bodies ────────────────────────────────────────────────────────

def json_or_form(model: Type[ModelT]) -> Callable[[Request], Any]:
    """
    Build a dependency that parses the body into `model`.

    Form-encoded bodies (HTML forms) are accepted alongside JSON on every
    route that takes a body. Both end in the same validation, and failures
    raise RequestValidationError so the error layer answers 400 with the
    usual field list ("body.<field>").
    """

    async def parse_body(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "")
        try:
            if content_type.startswith(FORM_CONTENT_TYPE):
                form = await request.form()
                payload: Any = {key: value for key, value in form.items()}
            else:
                payload = await request.json()
        except ValueError:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "Malformed request body"}]
            )

        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as e:
            errors = [
                {**error, "loc": ("body", *error["loc"])}
                for error in e.errors(include_url=False, include_context=False)
            ]
            raise RequestValidationError(errors, body=payload)

    return parse_body


def body_openapi(model: Type[pydantic.BaseModel]) -> Dict[str, Any]:
    """`openapi_extra` documenting a json_or_form() body under both content types."""
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                FORM_CONTENT_TYPE: {"schema": schema},
            },
        }
    }
