"""Constants for the Yandex Rasp API adapter.

API Documentation: https://yandex.ru/dev/rasp/doc/ru/reference/stations-list
The stations_list endpoint returns the whole directory in one response and
requires an API key.
"""

YANDEX_STATIONS_LIST_URL = "https://api.rasp.yandex.net/v3.0/stations_list/"

DEFAULT_LANG = "ru_RU"
RESPONSE_FORMAT = "json"

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
}
