"""Fixed endpoints, headers and environment variable names of the Kraken v5 API."""

API_ROOT = "https://api.twitch.tv/kraken"
AUTHORIZE_URL = f"{API_ROOT}/oauth2/authorize"

# Kraken only answers v5 when asked for it explicitly.
ACCEPT_MEDIA_TYPE = "application/vnd.twitchtv.v5+json"
CLIENT_ID_HEADER = "Client-ID"
AUTH_SCHEME = "OAuth"

ENV_CLIENT_ID = "TWITCH_CLIENT_ID"
ENV_OAUTH_TOKEN = "TWITCH_OAUTH_TOKEN"

DEFAULT_TIMEOUT = 30.0
