from fastapi import APIRouter, HTTPException
from kalakar.config.categories import CATEGORIES, get_category
from kalakar.modules.categories.schemas import CategoryResponse
from typing import List

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategoryResponse])
async def list_categories():
    """The craft categories creators can list themselves under"""
    return CATEGORIES


@router.get("/{name}", response_model=CategoryResponse)
async def get_category_detail(name: str):
    category = get_category(name)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
