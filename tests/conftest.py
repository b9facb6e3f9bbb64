import pytest
from unittest.mock import MagicMock, patch
import os
import sys

# Add root directory to path to import the packages under test
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from search.replace_keys import ReplaceKeyCounter

SAMPLE_SEARCH_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/" xmlns="http://oss.dbc.dk/ns/opensearch">
<SOAP-ENV:Body><searchResponse><result><hitCount>2</hitCount><more>false</more></result></searchResponse></SOAP-ENV:Body>
</SOAP-ENV:Envelope>"""


@pytest.fixture(scope="function")
def key_counter():
    """A fresh counter so key numbers in a test start at the first key."""
    return ReplaceKeyCounter()


@pytest.fixture(scope="function")
def mock_mongo_client():
    """Replaces the search history MongoDB client with a mock."""
    with patch('search.ting_search.MongoClient') as mongo_client:
        yield mongo_client


@pytest.fixture(scope="function")
def search_response():
    """An HTTP response mock carrying a small OpenSearch answer."""
    response = MagicMock()
    response.text = SAMPLE_SEARCH_RESPONSE
    response.raise_for_status.return_value = None
    return response
