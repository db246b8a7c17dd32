"""Constants for the DB API adapter.

Uses the db-rest API (v6.db.transport.rest by default).
API Documentation: https://v6.db.transport.rest/api.html

Rate limit: 100 requests/minute (burst 200 requests/minute)
No authentication required.
"""

DB_BASE_URL = "https://v6.db.transport.rest"
DB_API_NAME = "db_api"

# GET /stops/:id/departures
DEPARTURES_PATH = "/stops/{station_id}/departures"

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "reachable-from",
}

# Product flags the departures endpoint understands
KNOWN_PRODUCTS = (
    "nationalExpress",
    "national",
    "regionalExpress",
    "regional",
    "suburban",
    "bus",
    "ferry",
    "subway",
    "tram",
    "taxi",
)
