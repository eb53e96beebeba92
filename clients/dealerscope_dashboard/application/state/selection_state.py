from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from clients.dealerscope_dashboard.domain.models.scope import DepartmentRef, Profile, ReportingPeriod, StoreRef

KPI_DEFINITIONS_SLOT = "kpi_definitions"
KPI_STATUS_SLOT = "kpi_status"
ROCK_COUNTS_SLOT = "rock_counts"
TODO_COUNTS_SLOT = "todo_counts"

LOADER_SLOTS = (KPI_DEFINITIONS_SLOT, KPI_STATUS_SLOT, ROCK_COUNTS_SLOT, TODO_COUNTS_SLOT)

_notice_ids = itertools.count(1)


class Phase(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING_PROFILE = "loading_profile"
    PROFILE_FAILED = "profile_failed"
    RESOLVING_STORES = "resolving_stores"
    NO_ACCESS = "no_access"
    RESOLVING_DEPARTMENTS = "resolving_departments"
    READY = "ready"


class SlotStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class LoaderSlot:
    status: SlotStatus = SlotStatus.IDLE
    data: Any = None
    error: dict | None = None
    key: tuple | None = None
    request_token: int = 0

    @property
    def settled(self) -> bool:
        return self.status in {SlotStatus.LOADED, SlotStatus.FAILED}


@dataclass(frozen=True)
class Notice:
    id: int
    code: str
    message: str
    suggestion: str | None = None
    trace_id: str | None = None
    source: str | None = None
    retryable: bool = False


@dataclass
class SelectionState:
    phase: Phase = Phase.UNAUTHENTICATED
    user_id: str | None = None
    profile: Profile | None = None
    profile_error: dict | None = None
    stores: list[StoreRef] = field(default_factory=list)
    can_switch_stores: bool = False
    active_store_id: str | None = None
    store_generation: int = 0
    # None while no store is active: department resolution has not run.
    departments: list[DepartmentRef] | None = None
    active_department_id: str | None = None
    department_generation: int = 0
    period: ReportingPeriod = field(default_factory=ReportingPeriod)
    switching: bool = False
    slots: dict[str, LoaderSlot] = field(default_factory=lambda: {name: LoaderSlot() for name in LOADER_SLOTS})
    notices: list[Notice] = field(default_factory=list)

    @property
    def active_store(self) -> StoreRef | None:
        for store in self.stores:
            if store.id == self.active_store_id:
                return store
        return None

    @property
    def active_department(self) -> DepartmentRef | None:
        for department in self.departments or []:
            if department.id == self.active_department_id:
                return department
        return None

    def clear_dependent_data(self) -> None:
        for slot in self.slots.values():
            slot.status = SlotStatus.IDLE
            slot.data = None
            slot.error = None
            slot.key = None
            slot.request_token = 0

    def clear_department_selection(self, *, keep_candidates: bool = False) -> None:
        self.active_department_id = None
        if not keep_candidates:
            self.departments = None
        self.clear_dependent_data()

    def clear_store_selection(self) -> None:
        self.active_store_id = None
        self.clear_department_selection()

    def reset(self) -> None:
        self.phase = Phase.UNAUTHENTICATED
        self.user_id = None
        self.profile = None
        self.profile_error = None
        self.stores = []
        self.can_switch_stores = False
        self.clear_store_selection()
        self.store_generation = 0
        self.department_generation = 0
        self.period = ReportingPeriod()
        self.switching = False
        self.notices.clear()

    def add_notice(
        self,
        code: str,
        message: str,
        *,
        suggestion: str | None = None,
        trace_id: str | None = None,
        source: str | None = None,
        retryable: bool = False,
    ) -> Notice:
        notice = Notice(
            id=next(_notice_ids),
            code=code,
            message=message,
            suggestion=suggestion,
            trace_id=trace_id,
            source=source,
            retryable=retryable,
        )
        self.notices.append(notice)
        return notice

    def dismiss_notice(self, notice_id: int) -> bool:
        for index, notice in enumerate(self.notices):
            if notice.id == notice_id:
                del self.notices[index]
                return True
        return False
