"""Constants for the BSN.cloud client.

This module contains all the constants used throughout the client,
including API endpoints, session timing, and configuration keys.
"""

from datetime import timedelta

DEFAULT_BASE_URL = "https://api.bsn.cloud/v1"
TOKEN_URL = "https://auth.bsn.cloud/realms/bsncloud/protocol/openid-connect/token"
USER_AGENT = "bsn-cloud-client/0.1.0"

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF_FACTOR = 0.5

# Tokens are treated as expired this long before the server says so
TOKEN_SAFETY_MARGIN = timedelta(seconds=30)

HTTP_OK = 200
HTTP_NO_CONTENT = 204

ENDPOINT_DEVICES = "/Devices"
ENDPOINT_NETWORKS = "/networks"
ENDPOINT_SESSION_NETWORK = "/self/session/network"

CONF_CLIENT_ID = "client_id"
CONF_CLIENT_SECRET = "client_secret"
CONF_NETWORK_NAME = "network_name"
CONF_BASE_URL = "base_url"
CONF_TOKEN_URL = "token_url"
CONF_TIMEOUT = "timeout"
CONF_RETRIES = "retries"
CONF_BACKOFF_FACTOR = "backoff_factor"
