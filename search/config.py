import os

# Remote OpenSearch (Ting) service
OPENSEARCH_URL = os.environ.get("OPENSEARCH_URL", "https://opensearch.addi.dk/b3.5_5.2/")
OPENSEARCH_NAMESPACE = os.environ.get("OPENSEARCH_NAMESPACE", "http://oss.dbc.dk/ns/opensearch")
OPENSEARCH_AGENCY = os.environ.get("OPENSEARCH_AGENCY", "100200")
OPENSEARCH_PROFILE = os.environ.get("OPENSEARCH_PROFILE", "test")
DEFAULT_STEP_VALUE = int(os.environ.get("OPENSEARCH_STEP_VALUE", "10"))

REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "15"))
MAX_RETRIES = int(os.environ.get("MAX_RETRIES", "3"))

# Search history
MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017/")
DB_NAME = os.environ.get("DB_NAME", "easyscreen")
SEARCH_HISTORY_COLLECTION = "search_history"
