# listwikis/listing.py

import logging
from sqlalchemy.orm import Session

from . import crud
from .config import HOSTING_DOMAIN, LIMIT_DEFAULT, LIMIT_BIG1, LIMIT_BIG2, HIGH_LIMIT_GROUPS, STAFF_GROUP
from .languages import is_known_language
from .result import ApiResult, PARAM_PREFIX
from .schemas import CallerContext, ListWikisParams, WikiEntry, is_ts_mw, ts_mw_to_iso

logger = logging.getLogger(__name__)


class InvalidLanguage(Exception):
    code = "nosuchlang"
    info = "No such language"

    def __init__(self, lang: str):
        super().__init__(f"{self.info}: {lang}")
        self.lang = lang


def wiki_url(subdomain) -> str:
    return f"http://{subdomain or ''}.{HOSTING_DOMAIN}/"


def resolve_limit(params: ListWikisParams, caller: CallerContext, result: ApiResult) -> int:
    """Apply the default and the caller's maximum to the limit parameter."""
    high = any(caller.in_group(group) for group in HIGH_LIMIT_GROUPS)
    max_limit = LIMIT_BIG2 if high else LIMIT_BIG1

    if params.limit is None:
        return LIMIT_DEFAULT
    if params.limit == "max":
        return max_limit
    if params.limit < 1:
        result.add_warning(f'The value "{params.limit}" for parameter "{PARAM_PREFIX}limit" must be no less than 1.')
        return 1
    if params.limit > max_limit:
        who = "bots and sysops" if high else "users"
        result.add_warning(f"{PARAM_PREFIX}limit may not be over {max_limit} (set to {max_limit}) for {who}.")
        return max_limit
    return params.limit


def list_wikis(db: Session, params: ListWikisParams, caller: CallerContext, result: ApiResult) -> ApiResult:
    """Run list=listwikis and fill ``result`` with a count or a page of wikis."""
    if params.lang and not is_known_language(params.lang):
        logger.warning(f"Rejected unknown language code '{params.lang}'.")
        raise InvalidLanguage(params.lang)

    limit = resolve_limit(params, caller, result)

    if params.countonly:
        count = crud.count_wikis(db, params, limit)
        logger.info(f"Counted {count} wikis.")
        result.set_count(count)
        return result

    is_staff = caller.in_group(STAFF_GROUP)
    rows = db.execute(crud.wiki_rows_statement(db, params))
    count = 0
    try:
        for row in rows:
            wid = row.wl_id
            if not is_ts_mw(row.wl_timestamp):
                logger.warning(f"Skipping wiki {wid}: malformed wl_timestamp '{row.wl_timestamp}'.")
                continue

            wiki_type = crud.get_wiki_field(db, wid, "type")

            # Private wikis are hidden from non-staff without shrinking the page
            if wiki_type == "private" and not is_staff:
                continue

            count += 1
            if count > limit:
                result.set_continue("start", ts_mw_to_iso(row.wl_timestamp))
                break

            entry = WikiEntry(
                id=wid,
                lang=crud.get_wiki_field(db, wid, "lang"),
                url=wiki_url(crud.get_wiki_field(db, wid, "subdomain")),
                sitename=crud.get_wiki_field(db, wid, "sitename"),
                description=crud.get_wiki_field(db, wid, "description"),
                category=crud.get_wiki_field(db, wid, "category"),
                creationtimestamp=row.wl_timestamp,
                type=wiki_type,
            )
            # Staff can see the type so they can identify private wikis
            value = entry.model_dump() if is_staff else entry.model_dump(exclude={"type"})

            if not result.add(wid, value):
                result.set_continue("start", ts_mw_to_iso(row.wl_timestamp))
                break
    finally:
        rows.close()

    logger.info(f"Listed {len(result.data)} wikis (limit {limit}).")
    return result
