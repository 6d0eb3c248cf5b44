import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from relay_select.catalog import RetrievalError, fetch_servers
from relay_select.config import DEFAULT_SERVER_TYPE
from relay_select.selector import select_top_n

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def _flag(value):
    return str(value).lower() in ("1", "true", "yes", "on")


@app.errorhandler(RetrievalError)
def handle_retrieval_error(e):
    logger.error("Catalog retrieval failed: %s", e)
    return jsonify({"error": str(e)}), 502


@app.route('/api/servers')
def get_servers():
    """Get the full catalog for a server type."""
    server_type = request.args.get('type', DEFAULT_SERVER_TYPE)
    servers = fetch_servers(server_type)
    return jsonify([s.to_dict() for s in servers])


@app.route('/api/best')
def get_best():
    """Probe eligible servers and return the fastest ones."""
    server_type = request.args.get('type', DEFAULT_SERVER_TYPE)
    country = request.args.get('country') or None
    diskless = _flag(request.args.get('diskless', 'false'))
    try:
        n = int(request.args.get('n', 1))
    except ValueError:
        return jsonify({"error": "n must be an integer"}), 400
    if n < 1:
        return jsonify({"error": "n must be >= 1"}), 400

    servers = fetch_servers(server_type)
    shortlist = select_top_n(servers, country, diskless, n)
    if not shortlist:
        return jsonify({"error": "No eligible server found"}), 404
    return jsonify({"servers": [m.to_dict() for m in shortlist]})


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("Starting relay selection API...")
    print("API will be available at: http://localhost:5000/api/best")
    app.run(debug=False, port=5000, host='0.0.0.0')
