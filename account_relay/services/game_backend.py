"""
Client for the game's callable cloud functions.

Every function takes `{"data": ...}` with a bearer ID token and answers
`{"result": ...}`. Fetch results are JSON encoded strings; save results
are an acknowledgement whose encoding differs between deployments (see
`is_ack_success`).
"""
from typing import Any
import json
import re

from account_relay.config import settings
from account_relay.core.exceptions import FetchError, ParseError, SaveError
from account_relay.logger import logger
from account_relay.utils.relay import relay_post

# "result" of 1 or "1" inside a stringified body; the value must end at "," or "}"
ACK_PATTERN = re.compile(r'"result"\s*:\s*(?:"1"|1)\s*[,}]')


def is_ack_success(response: Any) -> bool:
    """
    True when a save response acknowledges success.

    Accepted: numeric 1, the string "1", either of those wrapped as
    {"result": ...}, or a string embedding a "result" of 1. Everything
    else, including None and booleans, is a failure.
    """
    if isinstance(response, bool) or response is None:
        return False
    if isinstance(response, (int, float)):
        return response == 1
    if isinstance(response, str):
        text = response.strip()
        if text == "1":
            return True
        return ACK_PATTERN.search(text) is not None
    if isinstance(response, dict) and "result" in response:
        return is_ack_success(response["result"])
    return False


def _describe(response: Any) -> str:
    """Short backend-specific reason for a failed call."""
    if response is None:
        return "no response"
    if isinstance(response, dict) and "error" in response:
        error = response["error"]
        if isinstance(error, dict):
            return str(error.get("message") or error.get("status") or error)
        return str(error)
    return str(response)[:200]


class GameBackend:
    def __init__(self):
        self.base_url = settings.GAME_BACKEND_URL.rstrip("/")
        self.device_header = settings.DEVICE_IDENTITY_HEADER
        self.device_token = settings.DEVICE_IDENTITY_TOKEN

    def _url(self, function_name: str) -> str:
        return f"{self.base_url}/{function_name}"

    @staticmethod
    def _headers(id_token: str) -> dict:
        return {"Authorization": f"Bearer {id_token}"}

    async def _fetch(self, function_name: str, id_token: str, timeout: float, what: str) -> Any:
        response = await relay_post(
            self._url(function_name),
            {"data": None},
            headers=self._headers(id_token),
            timeout=timeout,
        )
        if not isinstance(response, dict) or response.get("result") in (None, ""):
            raise FetchError(f"Could not fetch {what}", reason=_describe(response))

        result = response["result"]
        if not isinstance(result, str):
            return result
        try:
            return json.loads(result)
        except json.JSONDecodeError as e:
            raise ParseError(f"Could not decode {what}", reason=e.msg) from e

    async def fetch_player_record(self, id_token: str) -> dict:
        record = await self._fetch(
            settings.FETCH_PLAYER_FUNCTION, id_token, settings.FETCH_TIMEOUT, "player record"
        )
        if not isinstance(record, dict) or not record:
            raise FetchError("Could not fetch player record", reason="empty or malformed record")
        return record

    async def fetch_vehicle_list(self, id_token: str) -> list[dict]:
        vehicles = await self._fetch(
            settings.FETCH_VEHICLES_FUNCTION, id_token, settings.VEHICLE_LIST_TIMEOUT, "vehicle list"
        )
        if isinstance(vehicles, dict):
            vehicles = list(vehicles.values())
        if not isinstance(vehicles, list):
            raise FetchError("Could not fetch vehicle list", reason="malformed vehicle list")

        usable = [vehicle for vehicle in vehicles if isinstance(vehicle, dict)]
        if len(usable) != len(vehicles):
            logger.warning(f"Skipping {len(vehicles) - len(usable)} malformed vehicle entries")
        return usable

    async def save_player_record(self, id_token: str, record: dict) -> None:
        response = await relay_post(
            self._url(settings.SAVE_PLAYER_FUNCTION),
            {"data": json.dumps(record, ensure_ascii=False)},
            headers=self._headers(id_token),
            timeout=settings.SAVE_TIMEOUT,
        )
        if not is_ack_success(response):
            raise SaveError("Player record save was not acknowledged", reason=_describe(response))

    async def save_vehicle(self, id_token: str, vehicle: dict) -> None:
        headers = self._headers(id_token)
        if self.device_token:
            headers[self.device_header] = self.device_token

        response = await relay_post(
            self._url(settings.SAVE_VEHICLE_FUNCTION),
            {"data": json.dumps(vehicle, ensure_ascii=False)},
            headers=headers,
            timeout=settings.SAVE_TIMEOUT,
        )
        if not is_ack_success(response):
            raise SaveError("Vehicle save was not acknowledged", reason=_describe(response))
