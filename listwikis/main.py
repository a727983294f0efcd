# listwikis/main.py

import logging
from typing import Optional

from fastapi import FastAPI, Depends, Header, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import __version__, models
from .config import HOSTING_DOMAIN
from .database import engine, get_db
from .listing import InvalidLanguage, list_wikis
from .result import ApiResult, MODULE_NAME, PARAM_PREFIX
from .schemas import CallerContext, ListWikisParams

models.Base.metadata.create_all(bind=engine)

logger = logging.getLogger(__name__)

app = FastAPI(title="ShoutWiki API", version=__version__)

EXAMPLES = [
    ("action=query&list=listwikis", "List all active wikis."),
    ("action=query&list=listwikis&swdeleted=1", "List all wikis, including deleted ones."),
    ("action=query&list=listwikis&swwid=177", "Show information about the wiki with the ID 177."),
    ("action=query&list=listwikis&swfrom=100&swto=150", "List wikis with IDs between 100 and 150."),
    ("action=query&list=listwikis&swfrom=10&swto=50&swlang=fi",
     "List Finnish wikis with IDs between 10 and 50."),
    ("action=query&list=listwikis&swcountonly=1", "Count all active wikis."),
    ("action=query&list=listwikis&swdeleted=1&swcountonly=1", "Count all wikis, including deleted ones."),
]

PARAMETERS = {
    "wid": "Only show the wiki with this ID.",
    "deleted": "Include deleted wikis.",
    "from": "Start listing at this wiki ID.",
    "to": "Stop listing at this wiki ID.",
    "countonly": "Only return the number of matching wikis.",
    "lang": "Only list wikis in this language.",
    "limit": "How many wikis to return.",
    "start": "The timestamp to start enumerating from.",
    "end": "The timestamp to end enumerating.",
    "dir": "In which direction to enumerate (newer, older).",
}


def api_error(code: str, info: str) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content={"error": {"code": code, "info": info}},
        headers={"MediaWiki-API-Error": code},
    )


@app.exception_handler(InvalidLanguage)
def invalid_language_handler(request: Request, exc: InvalidLanguage):
    return api_error(exc.code, exc.info)


def get_caller(
    x_shoutwiki_user: Optional[str] = Header(default=None),
    x_shoutwiki_groups: Optional[str] = Header(default=None),
) -> CallerContext:
    """Caller identity as supplied by the fronting wiki. No authentication happens here."""
    groups = ["*"]
    user = (x_shoutwiki_user or "").strip() or None
    if user:
        groups.append("user")
    for group in (x_shoutwiki_groups or "").split(","):
        group = group.strip()
        if group and group not in groups:
            groups.append(group)
    return CallerContext(user=user, groups=groups)


@app.get("/")
def about():
    return {
        "name": "ShoutWiki API",
        "version": __version__,
        "description": "A collection of ShoutWiki-specific API modules",
        "url": "https://www.mediawiki.org/wiki/Extension:ShoutWiki_API",
        "domain": HOSTING_DOMAIN,
    }


@app.get("/api.php")
def api(request: Request, db: Session = Depends(get_db), caller: CallerContext = Depends(get_caller)):
    action = request.query_params.get("action")

    if action == "help":
        return {
            "help": {
                "module": f"query+{MODULE_NAME}",
                "prefix": PARAM_PREFIX,
                "parameters": {PARAM_PREFIX + name: text for name, text in PARAMETERS.items()},
                "examples": [{"query": query, "description": text} for query, text in EXAMPLES],
            }
        }

    if action != "query":
        return api_error("unknown_action", f'Unrecognized value for parameter "action": {action}.')

    list_name = request.query_params.get("list")
    if list_name != MODULE_NAME:
        return api_error("unknown_list", f'Unrecognized value for parameter "list": {list_name}.')

    raw = {
        key[len(PARAM_PREFIX):]: value
        for key, value in request.query_params.items()
        if key.startswith(PARAM_PREFIX)
    }
    params = ListWikisParams.model_validate(raw)
    logger.info(f"list={MODULE_NAME} for user '{caller.user}' with {raw}.")

    try:
        result = list_wikis(db, params, caller, ApiResult())
    except InvalidLanguage:
        raise
    except Exception as e:
        logger.error(f"list={MODULE_NAME} failed: {e}")
        raise

    return result.to_dict()
