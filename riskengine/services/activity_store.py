"""
Activity Store Service
In-memory per-entity activity records read by the risk assessor
"""

import logging
import numbers
import threading
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional

import numpy as np

from riskengine.models.schemas import ActivityRecord
from riskengine.utils.helpers import to_float

logger = logging.getLogger(__name__)

LOGIN_BUMP_PROBABILITY = 0.3
FAILED_ATTEMPT_PROBABILITY = 0.1
SUSPICIOUS_IP_PROBABILITY = 0.05

def _counter(record: ActivityRecord, key: str) -> int:
    """Current counter value; malformed values restart from 0."""
    value = record.get(key)
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    return int(to_float(value, 0.0))

def generate_activity_profile(rng: np.random.Generator) -> ActivityRecord:
    """
    Synthetic activity for one entity: 60% low-risk, 30% medium-risk and
    10% high-risk behavior. Integer ranges are half-open.
    """
    risk_factor = rng.random()

    if risk_factor < 0.6:
        activity = {
            "loginAttempts": int(rng.integers(5, 50)),
            "failedAttempts": int(rng.integers(0, 2)),
            "dataAccessCount": int(rng.integers(20, 200)),
            "privilegedOperations": int(rng.integers(0, 5)),
            "afterHoursAccess": int(rng.integers(0, 3)),
            "suspiciousIPs": 0,
            "dataDownloadSize": int(rng.integers(0, 100000)),
            "dataUploadSize": int(rng.integers(0, 50000)),
            "sessionDuration": int(rng.integers(30, 180)),
            "uniqueResourcesAccessed": int(rng.integers(1, 15)),
            "concurrentSessions": 1,
            "geographicAnomalies": 0,
            "timeAnomalies": int(rng.integers(0, 2)),
            "privilegeEscalationAttempts": 0,
            "dataAccessVelocity": float(rng.uniform(0, 30)),
        }
    elif risk_factor < 0.9:
        activity = {
            "loginAttempts": int(rng.integers(30, 120)),
            "failedAttempts": int(rng.integers(1, 8)),
            "dataAccessCount": int(rng.integers(100, 500)),
            "privilegedOperations": int(rng.integers(2, 20)),
            "afterHoursAccess": int(rng.integers(2, 15)),
            "suspiciousIPs": int(rng.integers(0, 3)),
            "dataDownloadSize": int(rng.integers(50000, 500000)),
            "dataUploadSize": int(rng.integers(20000, 200000)),
            "sessionDuration": int(rng.integers(60, 300)),
            "uniqueResourcesAccessed": int(rng.integers(10, 30)),
            "concurrentSessions": int(rng.integers(1, 3)),
            "geographicAnomalies": int(rng.integers(0, 2)),
            "timeAnomalies": int(rng.integers(1, 6)),
            "privilegeEscalationAttempts": int(rng.integers(0, 2)),
            "dataAccessVelocity": float(rng.uniform(20, 60)),
        }
    else:
        activity = {
            "loginAttempts": int(rng.integers(80, 200)),
            "failedAttempts": int(rng.integers(3, 15)),
            "dataAccessCount": int(rng.integers(300, 1000)),
            "privilegedOperations": int(rng.integers(15, 50)),
            "afterHoursAccess": int(rng.integers(10, 30)),
            "suspiciousIPs": int(rng.integers(1, 8)),
            "dataDownloadSize": int(rng.integers(200000, 5000000)),
            "dataUploadSize": int(rng.integers(100000, 2000000)),
            "sessionDuration": int(rng.integers(120, 480)),
            "uniqueResourcesAccessed": int(rng.integers(25, 50)),
            "concurrentSessions": int(rng.integers(2, 5)),
            "geographicAnomalies": int(rng.integers(1, 3)),
            "timeAnomalies": int(rng.integers(3, 10)),
            "privilegeEscalationAttempts": int(rng.integers(1, 3)),
            "dataAccessVelocity": float(rng.uniform(50, 100)),
        }

    last_activity = datetime.utcnow() - timedelta(minutes=int(rng.integers(1, 2880)))
    activity["lastActivity"] = last_activity.isoformat()
    return activity

class InMemoryActivityStore:
    """
    Thread-safe map of entity id to activity record.

    ``get`` hands out a copy. Updates and refreshes mutate records in place,
    one entity at a time, so a reader may see an entity before or after a
    refresh touches it but never a half-written dict.
    """

    def __init__(self, records: Optional[Dict[str, ActivityRecord]] = None):
        self._records: Dict[str, ActivityRecord] = {
            entity_id: dict(record) for entity_id, record in (records or {}).items()
        }
        self._lock = threading.Lock()
        self.refresh_count = 0
        self.last_refreshed: Optional[datetime] = None

    def get(self, entity_id: str) -> Optional[ActivityRecord]:
        with self._lock:
            record = self._records.get(entity_id)
            return dict(record) if record is not None else None

    def put(self, entity_id: str, record: ActivityRecord):
        with self._lock:
            self._records[entity_id] = dict(record)

    def update(self, entity_id: str, changes: Dict[str, Any]) -> bool:
        with self._lock:
            record = self._records.get(entity_id)
            if record is None:
                return False
            record.update(changes)
            record["lastUpdated"] = datetime.utcnow().isoformat()
            return True

    def entity_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._records)

    def refresh(self, rng: Optional[np.random.Generator] = None) -> int:
        """Randomly bump login, failure and suspicious-IP counters; returns the number of entities touched."""
        rng = rng if rng is not None else np.random.default_rng()
        touched = 0

        for entity_id in self.entity_ids():
            with self._lock:
                record = self._records.get(entity_id)
                if record is None:
                    continue

                if rng.random() < LOGIN_BUMP_PROBABILITY:
                    record["loginAttempts"] = _counter(record, "loginAttempts") + int(rng.integers(1, 5))

                if rng.random() < FAILED_ATTEMPT_PROBABILITY:
                    record["failedAttempts"] = _counter(record, "failedAttempts") + 1

                if rng.random() < SUSPICIOUS_IP_PROBABILITY:
                    record["suspiciousIPs"] = _counter(record, "suspiciousIPs") + 1

                record["lastActivity"] = datetime.utcnow().isoformat()
                touched += 1

        self.refresh_count += 1
        self.last_refreshed = datetime.utcnow()
        logger.debug(f"Refreshed activity for {touched} entities")
        return touched

    def seed_demo(self, count: int = 100, rng: Optional[np.random.Generator] = None) -> List[str]:
        rng = rng if rng is not None else np.random.default_rng()
        entity_ids = []

        for i in range(count):
            entity_id = f"USER{i + 1:03d}"
            self.put(entity_id, generate_activity_profile(rng))
            entity_ids.append(entity_id)

        logger.info(f"Seeded activity store with {count} demo entities")
        return entity_ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._records
