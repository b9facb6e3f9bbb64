from flask import Flask, request, jsonify, redirect, url_for
import logging
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from search.cql_doctor import string_to_cql
from search.ting_search import TingSearchEngine

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.route('/')
def index():
    return redirect(url_for('api_cql'))


@app.route('/api/cql', methods=['GET', 'POST'])
def api_cql():
    if request.method == 'GET':
        return jsonify({"usage": "POST JSON with a 'query' field to get it back as valid CQL"})

    payload = request.get_json(silent=True)
    if not payload or not isinstance(payload.get('query'), str):
        return jsonify({"error": "Request must be JSON with a 'query' field"}), 400
    query = payload['query']
    return jsonify({"query": query, "cql": string_to_cql(query)})


@app.route('/search', methods=['GET'])
def search():
    query = request.args.get('q', '')
    if not query.strip():
        return jsonify({"error": "Query parameter 'q' is required"}), 400

    start = request.args.get('start', 1, type=int)
    engine = TingSearchEngine()
    try:
        response, cql, exec_time = engine.search(query, start=start)
    finally:
        engine.close()

    result = {"query": query, "cql": cql, "execution_time": f"{exec_time:.4f}", "response": response}
    if response is None:
        logger.error(f"Search service did not answer for {cql!r}")
        result["error"] = "Search service request failed"
        return jsonify(result), 502
    return jsonify(result)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=5000)
