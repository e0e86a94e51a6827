from fastapi import Request

from taskboard.db.session import Database


def get_db(request: Request) -> Database:
    return request.app.state.db
