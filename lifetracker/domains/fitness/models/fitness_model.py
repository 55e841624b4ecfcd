"""Fitness records (workouts, measurements, targets) in the ``fitness`` container."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from lifetracker.core.errors import ApiError
from lifetracker.core.utils.dates import normalize_date, parse_datetime, utc_now_iso
from lifetracker.datastore.cosmos import get_container
from lifetracker.datastore.queries import find_items, read_or_none, sort_by_date, within_range

logger = logging.getLogger(__name__)

RECORD_TYPES = ("workout", "measurement", "goal")
_MANAGED_FIELDS = ("id", "userId", "createdAt", "updatedAt")


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


class FitnessModel:
    """Data access for one request; the container is resolved on first use."""

    def __init__(self) -> None:
        self._container = None

    def _ensure_container(self):
        if self._container is None:
            self._container = get_container("fitness")
        return self._container

    def create_fitness_record(self, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        container = self._ensure_container()
        rest = {key: value for key, value in data.items() if key not in _MANAGED_FIELDS and key != "date"}
        now = utc_now_iso()
        record = {
            "id": str(uuid.uuid4()),
            "userId": user_id,
            "createdAt": now,
            "updatedAt": now,
            "date": normalize_date(data.get("date")),
            **rest,
        }
        created = container.create_item(body=record)
        logger.debug("Created %s record %s for %s", record.get("type"), created["id"], user_id)
        return created

    def log_workout(
        self,
        user_id: str,
        *,
        activity: str,
        duration: float,
        date: Optional[str] = None,
        calories: Optional[float] = None,
        distance: Optional[float] = None,
        steps: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = _compact(
            {
                "activity": activity,
                "duration": duration,
                "calories": calories,
                "distance": distance,
                "steps": steps,
                "notes": notes,
            }
        )
        return self.create_fitness_record(user_id, {"type": "workout", "date": date, **payload})

    def log_measurement(
        self,
        user_id: str,
        *,
        measurement_type: str,
        value: float,
        unit: str,
        date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = _compact({"measurementType": measurement_type, "value": value, "unit": unit, "notes": notes})
        return self.create_fitness_record(user_id, {"type": "measurement", "date": date, **payload})

    def create_goal(
        self,
        user_id: str,
        *,
        goal_type: str,
        target_value: float,
        current_value: Optional[float] = None,
        deadline: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = _compact(
            {
                "goalType": goal_type,
                "targetValue": target_value,
                "currentValue": current_value,
                "deadline": deadline,
                "notes": notes,
            }
        )
        return self.create_fitness_record(
            user_id, {"type": "goal", "completed": False, "date": deadline, **payload}
        )

    def get_fitness_record_by_id(self, record_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        return read_or_none(self._ensure_container(), record_id, user_id)

    def find_record(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Look a record up by id across all users (ownership checks)."""
        matches = find_items(self._ensure_container(), id=record_id)
        return matches[0] if matches else None

    def get_user_fitness_records(self, user_id: str) -> List[Dict[str, Any]]:
        records = find_items(self._ensure_container(), partition_key=user_id, userId=user_id)
        return sort_by_date(records)

    def get_records_by_type(self, user_id: str, record_type: str) -> List[Dict[str, Any]]:
        records = find_items(self._ensure_container(), partition_key=user_id, userId=user_id, type=record_type)
        return sort_by_date(records)

    def get_records_by_date_range(self, user_id: str, start: Any, end: Any) -> List[Dict[str, Any]]:
        start_dt = parse_datetime(start)
        end_dt = parse_datetime(end)
        if start_dt is None or end_dt is None:
            raise ApiError.bad_request("invalid_date_range")
        records = find_items(self._ensure_container(), partition_key=user_id, userId=user_id)
        return sort_by_date(within_range(records, "date", start_dt, end_dt))

    def get_latest_measurement(self, user_id: str, measurement_type: str) -> Optional[Dict[str, Any]]:
        records = find_items(
            self._ensure_container(),
            partition_key=user_id,
            userId=user_id,
            type="measurement",
            measurementType=measurement_type,
        )
        ordered = sort_by_date(records)
        return ordered[0] if ordered else None

    def update_fitness_record(self, record_id: str, user_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        container = self._ensure_container()
        record = self.get_fitness_record_by_id(record_id, user_id)
        if not record:
            raise ApiError.not_found(f"Fitness record with ID {record_id} not found")
        changes = {key: value for key, value in updates.items() if key not in _MANAGED_FIELDS}
        if "date" in changes:
            changes["date"] = normalize_date(changes["date"])
        merged = {**record, **changes, "updatedAt": utc_now_iso()}
        return container.replace_item(item=record_id, body=merged)

    def delete_fitness_record(self, record_id: str, user_id: str) -> None:
        try:
            self._ensure_container().delete_item(item=record_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise ApiError.not_found(f"Fitness record with ID {record_id} not found")
