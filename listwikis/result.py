# listwikis/result.py

import json
import logging

from .config import API_MAX_RESULT_SIZE

logger = logging.getLogger(__name__)

MODULE_NAME = "listwikis"
PARAM_PREFIX = "sw"


class ApiResult:
    """Response accumulator for one request, bounded by a size budget.

    ``add`` mirrors ApiResult::addValue: an entry that would push the
    response over ``max_size`` is not added and ``False`` is returned.
    """

    def __init__(self, max_size: int = API_MAX_RESULT_SIZE):
        self.max_size = max_size
        self.size = 0
        self.data = {}
        self.warnings = []
        self.continue_value = None

    @staticmethod
    def _size_of(value) -> int:
        return len(json.dumps(value, ensure_ascii=False).encode("utf-8"))

    def add(self, key, value) -> bool:
        size = self._size_of(value)
        if self.size + size > self.max_size:
            logger.info(f"Result size limit of {self.max_size} bytes reached at entry '{key}'.")
            return False
        self.data[str(key)] = value
        self.size += size
        return True

    def set_count(self, count: int):
        self.data = {"count": count}

    def add_warning(self, message: str):
        self.warnings.append(message)

    def set_continue(self, param: str, value: str):
        self.continue_value = (PARAM_PREFIX + param, value)

    def to_dict(self) -> dict:
        body = {}
        if self.continue_value is None:
            body["batchcomplete"] = ""
        else:
            name, value = self.continue_value
            body["continue"] = {name: value, "continue": "-||"}
        if self.warnings:
            body["warnings"] = {MODULE_NAME: {"*": "\n".join(self.warnings)}}
        body["query"] = {MODULE_NAME: self.data}
        return body
