# result_sheet/core/database.py
from functools import lru_cache

from pymongo import MongoClient
from pymongo.collection import Collection

from result_sheet.core.config import CONFIG
from result_sheet.core.logger import get_logger

logger = get_logger("database")


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    # MongoClient connects lazily; nothing hits the network until the first query.
    logger.info("Using MongoDB database '%s'", CONFIG.MONGO_DB)
    return MongoClient(CONFIG.MONGO_URI)


def get_results_collection() -> Collection:
    db = get_client()[CONFIG.MONGO_DB]
    return db[CONFIG.RESULTS_COLLECTION]
