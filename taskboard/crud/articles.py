from typing import Any, Dict, List, Mapping

from sqlalchemy import func, select

from taskboard.core.errors import ConflictError
from taskboard.crud.base import Resource, cascade_delete, insert_row, patch_row, require_row
from taskboard.db.models.article import Article
from taskboard.db.session import Database

articles = Article.__table__

ARTICLE = Resource(
    table=articles,
    label="Article",
    allowed_fields=frozenset({"headline", "link"}),
)

DUPLICATE_LINK = "Article with this link already exists"

def _link_taken(runner, link: str, exclude_id=None) -> bool:
    stmt = select(articles.c.id).where(articles.c.link == link)
    if exclude_id is not None:
        stmt = stmt.where(articles.c.id != exclude_id)
    return runner.fetch_one(stmt) is not None

def list_articles(db: Database) -> List[Dict[str, Any]]:
    return db.fetch_many(select(articles).order_by(articles.c.created_at.desc(), articles.c.id.desc()))

def get_article(db: Database, article_id: int) -> Dict[str, Any]:
    return require_row(db, ARTICLE, article_id)

def create_article(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    with db.transaction() as tx:
        if _link_taken(tx, data["link"]):
            raise ConflictError(DUPLICATE_LINK)
        return insert_row(tx, ARTICLE, {"headline": data["headline"], "link": data["link"]})

def update_article(db: Database, article_id: int, updates: Mapping[str, Any]) -> Dict[str, Any]:
    link = updates.get("link")
    if link is not None:
        require_row(db, ARTICLE, article_id)
        if _link_taken(db, link, exclude_id=article_id):
            raise ConflictError(DUPLICATE_LINK)
    return patch_row(db, ARTICLE, article_id, updates)

def delete_article(db: Database, article_id: int) -> None:
    cascade_delete(db, ARTICLE, article_id)

def article_stats(db: Database) -> Dict[str, Any]:
    stmt = select(
        func.count().label("total"),
        func.max(articles.c.created_at).label("latest_created_at"),
    ).select_from(articles)
    return db.fetch_one(stmt)
