import logging
import time
from datetime import datetime, timezone

from pymongo import MongoClient

from search.config import (DB_NAME, DEFAULT_STEP_VALUE, MAX_RETRIES, MONGO_URI, OPENSEARCH_AGENCY,
                           OPENSEARCH_NAMESPACE, OPENSEARCH_PROFILE, OPENSEARCH_URL, REQUEST_TIMEOUT,
                           SEARCH_HISTORY_COLLECTION)
from search.cql_doctor import CqlDoctor
from soap_client.nano_soap import NanoSoapClient

logger = logging.getLogger(__name__)


class TingSearchEngine:
    def __init__(self, endpoint=OPENSEARCH_URL, agency=OPENSEARCH_AGENCY, profile=OPENSEARCH_PROFILE,
                 mongo_uri=MONGO_URI, db_name=DB_NAME, key_counter=None):
        self.agency = agency
        self.profile = profile
        self.key_counter = key_counter
        self.soap = NanoSoapClient(endpoint, namespaces={"": OPENSEARCH_NAMESPACE},
                                   timeout=REQUEST_TIMEOUT, max_retries=MAX_RETRIES)
        self.client = MongoClient(mongo_uri)
        self.db = self.client[db_name]
        self.history_collection = self.db[SEARCH_HISTORY_COLLECTION]

    def build_query(self, phrase: str) -> str:
        """Cures the search phrase into CQL the search service accepts."""
        return CqlDoctor(phrase, key_counter=self.key_counter).string_to_cql()

    def search(self, phrase: str, start: int = 1, step: int = DEFAULT_STEP_VALUE):
        """
        Performs a search for the given phrase.
        Returns the raw response body (None if the request failed), the CQL
        that was sent and the execution time.
        """
        start_time = time.time()

        # 1. Turn the phrase into valid CQL
        cql = self.build_query(phrase)

        # 2. Send the search request
        response = self.soap.call("searchRequest", {
            "query": cql,
            "agency": self.agency,
            "profile": self.profile,
            "start": start,
            "stepValue": step,
            "outputType": "xml",
        })
        if response is None:
            logger.warning(f"Search for {cql!r} failed")

        execution_time = time.time() - start_time

        # 3. Save search history
        self.history_collection.insert_one({
            "query": phrase,
            "parsed_query": cql,
            "success": response is not None,
            "execution_time": execution_time,
            "timestamp": datetime.now(timezone.utc),
        })

        return response, cql, execution_time

    def close(self):
        self.soap.close()
        self.client.close()
