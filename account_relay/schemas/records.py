"""
Player and vehicle records as returned by the game backend.

Only the fields the relay reads or writes are typed. Everything else is
kept verbatim in `extra` and written back unchanged by `to_payload()`.
"""
from dataclasses import dataclass, field
from typing import Any, Optional
import copy

from account_relay.utils.identifiers import replace_identifier

# The backend uses both spellings; the second one may carry colour codes
PLAYER_ID_FIELDS = ("localID", "LocalID")
NAME_FIELD = "Name"
MONEY_FIELD = "money"
COIN_FIELD = "coin"
EXTRA_DATA_FIELD = "extraData"
VEHICLE_ID_FIELD = "CarID"

_PLAYER_KNOWN_FIELDS = (*PLAYER_ID_FIELDS, NAME_FIELD, MONEY_FIELD, COIN_FIELD)


@dataclass
class PlayerRecord:
    local_id: str = ""
    name: Optional[str] = None
    money: Any = None
    coin: Any = None
    id_fields: tuple = (PLAYER_ID_FIELDS[0],)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "PlayerRecord":
        extra = copy.deepcopy(payload)
        present = tuple(key for key in PLAYER_ID_FIELDS if key in extra)
        ids = [extra.pop(key) for key in present]
        local_id = next((value for value in ids if isinstance(value, str) and value), "")

        return cls(
            local_id=local_id,
            name=extra.pop(NAME_FIELD, None),
            money=extra.pop(MONEY_FIELD, None),
            coin=extra.pop(COIN_FIELD, None),
            id_fields=present or (PLAYER_ID_FIELDS[0],),
            extra=extra,
        )

    def to_payload(self) -> dict:
        payload = {key: self.local_id for key in self.id_fields}
        if self.name is not None:
            payload[NAME_FIELD] = self.name
        if self.money is not None:
            payload[MONEY_FIELD] = self.money
        if self.coin is not None:
            payload[COIN_FIELD] = self.coin
        payload.update(copy.deepcopy(self.extra))
        return payload


@dataclass
class VehicleRecord:
    car_id: Optional[str] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "VehicleRecord":
        extra = copy.deepcopy(payload)
        return cls(car_id=extra.pop(VEHICLE_ID_FIELD, None), extra=extra)

    def retarget(self, old_id: str, old_id_clean: str, new_id: str) -> None:
        """Point the embedded owner identifier in CarID at `new_id`."""
        if not isinstance(self.car_id, str) or not old_id:
            return
        self.car_id = replace_identifier(self.car_id, old_id, old_id_clean, new_id)

    def to_payload(self) -> dict:
        payload = {}
        if self.car_id is not None:
            payload[VEHICLE_ID_FIELD] = self.car_id
        payload.update(copy.deepcopy(self.extra))
        return payload
