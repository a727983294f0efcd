# listwikis/crud.py
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models
from .schemas import ListWikisParams

# WikiRecord field -> wiki_settings.ws_setting
SETTING_NAMES = {
    "lang": "wgLanguageCode",
    "sitename": "wgSitename",
    "description": "wgDescription",
    "category": "wgCategory",
    "subdomain": "wgFullSubdomain",
    "type": "wgWikiType",
}


def get_setting(db: Session, wiki_id: int, name: str) -> Optional[str]:
    row = (
        db.query(models.WikiSetting.ws_value)
        .filter(models.WikiSetting.ws_wiki == wiki_id, models.WikiSetting.ws_setting == name)
        .first()
    )
    return row.ws_value if row is not None else None


def get_wiki_field(db: Session, wiki_id: int, field: str) -> Optional[str]:
    return get_setting(db, wiki_id, SETTING_NAMES[field])


def build_wiki_query(db: Session, params: ListWikisParams, *columns):
    """Apply the list=listwikis filters to a query over wiki_list.

    Ordering and the selected columns are left to the caller.
    """
    query = db.query(*columns).select_from(models.WikiList)

    if params.start or params.end:
        if params.dir == "newer":
            after, before = params.start, params.end
        else:
            after, before = params.end, params.start
        if after:
            query = query.filter(models.WikiList.wl_timestamp >= after)
        if before:
            query = query.filter(models.WikiList.wl_timestamp <= before)

    if not params.deleted:
        query = query.filter(models.WikiList.wl_deleted == 0)

    if params.wid:
        query = query.filter(models.WikiList.wl_id == params.wid)
    else:
        if params.to:
            query = query.filter(models.WikiList.wl_id <= params.to)
        if params.from_:
            query = query.filter(models.WikiList.wl_id >= params.from_)

    if params.lang:
        query = query.join(
            models.WikiSetting, models.WikiSetting.ws_wiki == models.WikiList.wl_id
        ).filter(
            models.WikiSetting.ws_setting == SETTING_NAMES["lang"],
            models.WikiSetting.ws_value == params.lang,
        )

    return query


def count_wikis(db: Session, params: ListWikisParams, limit: int) -> int:
    # LIMIT has no effect on a single aggregate row
    query = build_wiki_query(db, params, func.count().label("cnt")).limit(limit + 1)
    return int(query.one().cnt)


def wiki_rows_statement(db: Session, params: ListWikisParams):
    query = build_wiki_query(db, params, models.WikiList.wl_id, models.WikiList.wl_timestamp)
    return query.order_by(models.WikiList.wl_id.asc()).statement
