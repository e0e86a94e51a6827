from typing import Annotated

from fastapi import APIRouter, Depends, Path

from taskboard.crud import articles as crud
from taskboard.db.session import Database
from taskboard.routers import deps
from taskboard.schemas.article import ArticleCreate, ArticleUpdate
from taskboard.utils.envelope import success

router = APIRouter(prefix="/articles", tags=["articles"])

ArticleId = Annotated[int, Path(gt=0)]

@router.get("")
async def list_articles(db: Database = Depends(deps.get_db)):
    return success(crud.list_articles(db))

@router.get("/stats/summary")
async def article_stats(db: Database = Depends(deps.get_db)):
    return success(crud.article_stats(db))

@router.get("/{article_id}")
async def get_article(article_id: ArticleId, db: Database = Depends(deps.get_db)):
    return success(crud.get_article(db, article_id))

@router.post("", status_code=201)
async def create_article(payload: ArticleCreate, db: Database = Depends(deps.get_db)):
    article = crud.create_article(db, payload.model_dump())
    return success(article, "Article created successfully")

@router.put("/{article_id}")
async def update_article(payload: ArticleUpdate, article_id: ArticleId, db: Database = Depends(deps.get_db)):
    article = crud.update_article(db, article_id, payload.changes())
    return success(article, "Article updated successfully")

@router.delete("/{article_id}")
async def delete_article(article_id: ArticleId, db: Database = Depends(deps.get_db)):
    crud.delete_article(db, article_id)
    return success(message="Article deleted successfully")
