"""API for TableGen."""

from fastapi import APIRouter

from tablegen.api.v1.endpoints import auth, tables

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
