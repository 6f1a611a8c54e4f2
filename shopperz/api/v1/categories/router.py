"""
Category API router
"""

from fastapi import APIRouter, Depends
from typing import List

from shopperz.api.dependencies import get_store
from shopperz.services.store import Store

router = APIRouter()

@router.get("/", response_model=List[str], summary="List categories")
async def list_categories(store: Store = Depends(get_store)):
    return store.get_categories()
