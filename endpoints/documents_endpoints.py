# documents_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from docstore.repositories import AsyncDocumentRepository

router = APIRouter(tags=["documents"])
logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


def _repo(request: Request) -> AsyncDocumentRepository:
    return request.app.state.repository


def _require_mapping(body: dict[str, Any], key: str) -> dict[str, Any]:
    value = body.get(key)
    if not isinstance(value, dict):
        raise HTTPException(status_code=400, detail=f"{key} (object) is required")
    return value


# -------------------------------------------------------------------
# Demo user form
# -------------------------------------------------------------------
@router.get("/")
async def user_form() -> HTMLResponse:
    return HTMLResponse(
        """
<!doctype html>
<html>
  <head><meta charset="utf-8"><title>User Form</title></head>
  <body>
    <h1>User Form</h1>
    <form action="/users" method="post">
      <label for="username">Username:</label>
      <input type="text" id="username" name="username" required><br><br>
      <label for="email">Email:</label>
      <input type="email" id="email" name="email" required><br><br>
      <button type="submit">Submit</button>
    </form>
  </body>
</html>
""".strip(),
        status_code=200,
    )


@router.get("/users")
async def list_users(request: Request) -> JSONResponse:
    users = await _repo(request).find(USERS_COLLECTION, {})
    return JSONResponse(users)


@router.post("/users")
async def create_user(
    request: Request,
    username: str = Form(...),
    email: str = Form(...),
) -> RedirectResponse:
    uname = username.strip()
    if not uname:
        raise HTTPException(status_code=400, detail="username is required")
    await _repo(request).insert(USERS_COLLECTION, {"username": uname, "email": email.strip()})
    return RedirectResponse(url="/users", status_code=302)


# -------------------------------------------------------------------
# Generic collection API
# -------------------------------------------------------------------
@router.get("/collections/{collection}/documents")
async def find_documents(request: Request, collection: str) -> JSONResponse:
    # query parameters are string-valued equality filters
    flt = dict(request.query_params)
    docs = await _repo(request).find(collection, flt)
    return JSONResponse(docs)


@router.post("/collections/{collection}/documents")
async def insert_document(request: Request, collection: str, body: dict[str, Any]) -> JSONResponse:
    doc = await _repo(request).insert(collection, body)
    return JSONResponse(doc, status_code=201)


@router.patch("/collections/{collection}/documents")
async def update_document(request: Request, collection: str, body: dict[str, Any]) -> JSONResponse:
    flt = _require_mapping(body, "filter")
    patch = _require_mapping(body, "patch")
    doc = await _repo(request).update(collection, flt, patch)
    if doc is None:
        raise HTTPException(status_code=404, detail="no document matches filter")
    return JSONResponse(doc)


@router.delete("/collections/{collection}/documents")
async def delete_document(request: Request, collection: str, body: dict[str, Any]) -> JSONResponse:
    flt = _require_mapping(body, "filter")
    doc = await _repo(request).delete(collection, flt)
    if doc is None:
        raise HTTPException(status_code=404, detail="no document matches filter")
    return JSONResponse(doc)
