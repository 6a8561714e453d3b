"""
Flask frontend for TalentHub listings.

Proxies every paginated listing of the list API and decorates the
response with a ready-to-render pager:

    GET /api/jobs?page=2            -> {"status", "data", "pager"}
    GET /api/recruiters/<id>/jobs   -> same shape

Upstream failures map to 504 (timeout), 503 (unreachable) or 502.
"""

import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from src.common.config import Config
from src.common.error_handling import ListFetchFailed
from version import __version__

from .api_client import ListFetchClient, ListState, build_list_request
from .pager import build_pager

# Load environment variables
load_dotenv()

APP_VERSION = __version__

app = Flask(__name__)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Items arrays the list API can return, keyed by the envelope key
RESOURCE_KEYS = ("jobs", "applications", "users", "talents", "notifications", "messages")

# Path segments whose listing uses a differently named key
SEGMENT_KEYS = {"search-talents": "talents"}

# The public job board shows a 4x3 grid
JOB_BOARD_PATH = "jobs"

_client: Optional[ListFetchClient] = None


def _get_client() -> ListFetchClient:
    """Lazily create the shared list API client."""
    global _client
    if _client is None:
        _client = ListFetchClient(
            base_url=Config.API_BASE_URL,
            token=Config.API_TOKEN or None,
            timeout=Config.REQUEST_TIMEOUT,
        )
        logger.info(f"List API client created for {Config.API_BASE_URL}")
    return _client


def resource_key_for(path: str) -> Optional[str]:
    """
    Envelope key for a list path: the last segment naming a resource.

    "jobs/search" -> "jobs", "jobs/<id>/applications" -> "applications",
    "recruiters/<id>/search-talents" -> "talents".
    """
    for segment in reversed(path.strip("/").split("/")):
        segment = SEGMENT_KEYS.get(segment, segment)
        if segment in RESOURCE_KEYS:
            return segment
    return None


def _int_arg(args: Dict[str, Any], name: str) -> Optional[int]:
    raw = args.pop(name, None)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer")


def _error(message: str, status_code: int):
    return jsonify({"status": "error", "message": message}), status_code


def _upstream_status(error: ListFetchFailed) -> int:
    """HTTP status to answer with when the list API call failed."""
    if error.status_code in (503, 504):
        return error.status_code
    if error.status_code is not None and 400 <= error.status_code < 500:
        return error.status_code
    return 502


@app.route("/api/<path:resource>", methods=["GET"])
def list_resource(resource: str):
    """
    Proxy one list page.

    Query Parameters:
        page: Page number (default: 1)
        limit: Items per page (default: 12 for the job board, 10 otherwise)
        ...: Any other parameter is forwarded as a filter
    """
    resource_key = resource_key_for(resource)
    if resource_key is None:
        return _error(f"Unknown listing: /{resource}", 404)

    args = request.args.to_dict()
    try:
        page = _int_arg(args, "page")
        limit = _int_arg(args, "limit")
    except ValueError as e:
        return _error(str(e), 400)

    if page is None:
        page = 1
    if page < 1:
        return _error("page must be >= 1", 400)
    if limit is not None and limit < 1:
        return _error("limit must be >= 1", 400)

    if limit is None:
        limit = (
            Config.JOB_BOARD_PAGE_LIMIT
            if resource.strip("/") == JOB_BOARD_PATH
            else Config.DEFAULT_PAGE_LIMIT
        )

    state = ListState(
        resource=f"/{resource.strip('/')}",
        resource_key=resource_key,
        page=page,
        limit=limit,
        filters=args,
    )

    try:
        result = _get_client().fetch(build_list_request(state), resource_key)
    except ListFetchFailed as e:
        logger.warning(f"Listing {state.resource} page {page} failed: {e}")
        return _error(e.user_message, _upstream_status(e))

    pager = build_pager(result.pagination)
    return jsonify({
        "status": "success",
        "data": {
            resource_key: result.items,
            "pagination": result.pagination.to_dict(),
        },
        "pager": pager.to_dict() if pager else None,
    })


@app.route("/health", methods=["GET"])
def health_check():
    """Public health endpoint for load balancers."""
    return jsonify({
        "status": "healthy",
        "service": "talenthub-frontend",
        "version": APP_VERSION,
        "api_url": Config.API_BASE_URL,
    })


if __name__ == "__main__":
    Config.validate()
    logger.info(Config.summary())
    app.run(debug=Config.DEBUG_MODE, port=5001)
