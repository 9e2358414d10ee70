"""
Request bodies for the worktime punch API.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from puncher.errors import MissingFieldError, UnsupportedPunchError


class PunchType(str, Enum):
    BREAK = "BREAK"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"

    def __str__(self) -> str:
        return self.value


def punch_timestamp(now: Optional[datetime] = None) -> str:
    """Local time with UTC offset, e.g. 2023-08-22T14:09:09+03:00."""
    now = now or datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()
    return now.isoformat(timespec="seconds")


def create_punch_json(
    punch_type: PunchType,
    description: Optional[str] = None,
    cost_centre_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    timestamp = punch_timestamp(now)
    if punch_type is PunchType.BREAK:
        raise UnsupportedPunchError("Starting a BREAK is not supported!")
    if punch_type is PunchType.LOGIN:
        if not description:
            raise MissingFieldError("description", punch_type.value)
        if cost_centre_id is None:
            raise MissingFieldError("customerCostcentre", punch_type.value)
        return {
            "newPunch": {
                "type": punch_type.value,
                "description": description,
                "customerCostcentre": {"id": cost_centre_id},
                "timestamp": timestamp,
                "realTimestamp": timestamp,
            }
        }
    return {
        "newPunch": {
            "type": punch_type.value,
            "timestamp": timestamp,
            "realTimestamp": timestamp,
        }
    }


EXAMPLE_LOGIN = {
    "newPunch": {
        "type": "LOGIN",
        "description": "Rusting it out",
        "customerCostcentre": {"id": 101124},
        "timestamp": "2023-08-22T14:09:09+03:00",
        "realTimestamp": "2023-08-22T14:09:09+03:00",
    }
}

EXAMPLE_LOGOUT = {
    "newPunch": {
        "type": "LOGOUT",
        "customerCostcentre": None,
        "timestamp": "2023-08-22T14:08:55+03:00",
        "realTimestamp": "2023-08-22T14:08:55+03:00",
    }
}

_EXAMPLE_USER = {
    "id": 27874,
    "name": "Lång Jani",
    "personNumber": "",
    "teams": [{"id": 4442, "isDefaultTeam": True, "name": "Team Sysadmin"}],
}

EXAMPLE_LOGIN_RESPONSE = {
    "result": {
        "address": None,
        "checkEventId": None,
        "customerCostcentre": {
            "code": 9006,
            "costcenter": {
                "code": "21",
                "deleted": False,
                "description": "Kiho AI Business Platform",
                "id": 30654,
                "name": "Palvelinympäristön kehitys",
                "vismaCode": "",
            },
            "customer": {
                "code": 7001,
                "id": 4410,
                "identity": "1862344-1",
                "name": "Kiho Oy",
                "nameExtra": "",
                "nickname": "",
            },
            "deleted": True,
            "description": None,
            "favourited": 0,
            "id": 101124,
            "name": "Palvelinympäristön kehitys",
            "project": {
                "active": False,
                "code": "272",
                "deleted": False,
                "description": "272/31/2019 / Tekes",
                "id": 109,
                "name": "Kiho AI Business Platform",
            },
            "workOrderNumber": None,
            "worksite": None,
        },
        "description": "Rusting it out",
        "device_sn": "",
        "id": 13586650,
        "labels": [],
        "location": None,
        "locationValidationEvent": None,
        "realTimestamp": "2023-08-24T08:02:12+03:00",
        "source": "UNKNOWN",
        "timestamp": "2023-08-24T08:02:12+03:00",
        "type": "LOGIN",
        "user": _EXAMPLE_USER,
        "wagecode": {"code": "0001", "id": 1268, "name": "Kuukausipalkka", "type": "WORK"},
        "worklabel": None,
    }
}

EXAMPLE_LOGOUT_RESPONSE = {
    "result": {
        "address": None,
        "checkEventId": None,
        "customerCostcentre": None,
        "description": "",
        "device_sn": "",
        "id": 13587416,
        "labels": [],
        "location": None,
        "locationValidationEvent": None,
        "realTimestamp": "2023-08-24T09:44:40+03:00",
        "source": "UNKNOWN",
        "timestamp": "2023-08-24T09:44:40+03:00",
        "type": "LOGOUT",
        "user": _EXAMPLE_USER,
        "wagecode": None,
        "worklabel": None,
    }
}


def summarize_response(response: dict[str, Any]) -> str:
    """One line summary of a punch API response."""
    result = response.get("result") or {}
    return (
        f"{result.get('timestamp', '')} {result.get('type', '')} "
        f"'{result.get('description') or ''}' (id: {result.get('id')})"
    )
