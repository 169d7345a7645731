import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from prayerbook.core.errors import TransportError
from prayerbook.prayers.schemas import Language, PrayersResponse

DEFAULT_BASE_URL = "https://bahaiprayers.net/api/prayer"

_languages_adapter = TypeAdapter(List[Language])


class PrayerApiClient:
    """Content API client. One attempt per call; every failure raises TransportError."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.base_url = (self.config.get("base_url") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = self.config.get("timeout")
        self.logger = logging.getLogger(self.__class__.__name__)

    def fetch_languages(self) -> List[Language]:
        """Get the language catalog"""
        data = self._get_json(f"{self.base_url}/languages")
        try:
            languages = _languages_adapter.validate_python(data)
        except ValidationError as e:
            raise TransportError(f"Error parsing languages response: {e}") from e
        self.logger.debug(f"Fetched {len(languages)} language(s)")
        return languages

    def fetch_prayers(self, language_id: int) -> PrayersResponse:
        """Get every prayer of one language"""
        params = {"html": "false", "languageid": language_id}
        data = self._get_json(f"{self.base_url}/prayersystembylanguage", params=params)
        try:
            response = PrayersResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Error parsing prayers response: {e}") from e

        if response.is_in_error:
            raise TransportError(f"Error retrieving prayers: {response.error_message or 'unknown error'}")
        self.logger.debug(f"Fetched {len(response.prayers)} prayer(s), version {response.version}")
        return response

    def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self.logger.debug(f"Making API request to {url} with params {params}")
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Network error fetching {url}: {e}") from e

        if response.status_code != requests.codes.ok:
            raise TransportError(f"http code {response.status_code} - {response.text}")

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}") from e
