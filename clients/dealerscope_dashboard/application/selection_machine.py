"""Store/department selection for every dashboard view.

Phases run Unauthenticated -> LoadingProfile -> ResolvingStores ->
ResolvingDepartments -> Ready. Every asynchronous result is checked against
the selection it was requested for and dropped when that selection has since
changed. Persisted hints go through the same validation as a first-time
default. Realtime notifications only re-run dependent loaders; they never
touch the store or department selection.
"""
from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable, Iterable
from typing import Any

from clients.dealerscope_dashboard.application.ports import (
    KPI_DEFINITIONS_RECORDS,
    ROCK_RECORDS,
    SCORECARD_ENTRY_RECORDS,
    TODO_RECORDS,
    ChangeSubscriber,
    DashboardDataSource,
    HintStore,
)
from clients.dealerscope_dashboard.application.session_provider import (
    SIGNED_IN,
    SIGNED_OUT,
    SessionProvider,
    SessionUser,
)
from clients.dealerscope_dashboard.application.state.selection_state import (
    KPI_DEFINITIONS_SLOT,
    KPI_STATUS_SLOT,
    LOADER_SLOTS,
    ROCK_COUNTS_SLOT,
    TODO_COUNTS_SLOT,
    Phase,
    SelectionState,
    SlotStatus,
)
from clients.dealerscope_dashboard.domain.models.scope import ReportingPeriod
from clients.dealerscope_dashboard.domain.policies.selection_policy import (
    DepartmentSelectionPolicy,
    PreferredDepartmentPolicy,
    StoreSelectionPolicy,
)
from clients.dealerscope_dashboard.infrastructure.errors.error_mapper import ErrorMapper
from clients.dealerscope_dashboard.infrastructure.hint_store import DEPARTMENT_HINT_KEY, STORE_HINT_KEY
from clients.dealerscope_dashboard.infrastructure.logging.logger import get_logger, log_selection, selection_event

RECORD_TYPE_SLOTS = {
    KPI_DEFINITIONS_RECORDS: (KPI_DEFINITIONS_SLOT, KPI_STATUS_SLOT),
    SCORECARD_ENTRY_RECORDS: (KPI_STATUS_SLOT,),
    ROCK_RECORDS: (ROCK_COUNTS_SLOT,),
    TODO_RECORDS: (TODO_COUNTS_SLOT,),
}
PERIOD_SLOTS = (KPI_STATUS_SLOT, ROCK_COUNTS_SLOT)

logger = get_logger("dealerscope.dashboard.selection")


class SelectionMachine:
    def __init__(
        self,
        data_source: DashboardDataSource,
        hint_store: HintStore,
        *,
        preferred_department: PreferredDepartmentPolicy | None = None,
    ) -> None:
        self.data_source = data_source
        self.hints = hint_store
        self.preferred_department = preferred_department or PreferredDepartmentPolicy()
        self.state = SelectionState()
        self._generations = itertools.count(1)
        self._request_tokens = itertools.count(1)
        self._session_epoch = 0
        self._store_scope_token = 0
        self._department_scope_token = 0
        self._tasks: set[asyncio.Task] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._realtime_unsubscribers: list[Callable[[], None]] = []
        self._session_unsubscribe: Callable[[], None] | None = None

    # Session

    def attach_session(self, provider: SessionProvider) -> None:
        self._loop = asyncio.get_running_loop()
        loop = self._loop

        def on_session_change(event: str, user: SessionUser | None) -> None:
            if event == SIGNED_IN and user is not None:
                loop.call_soon_threadsafe(self._spawn, self.start, user.user_id)
            elif event == SIGNED_OUT:
                loop.call_soon_threadsafe(self.sign_out)

        self._session_unsubscribe = provider.subscribe(on_session_change)
        current = provider.current_user()
        if current is not None:
            self._spawn(self.start, current.user_id)

    async def start(self, user_id: str) -> None:
        self._session_epoch += 1
        self.state.reset()
        self.state.user_id = user_id
        self.hints.bind_user(user_id)
        await self.load_profile()

    def sign_out(self) -> None:
        self._log("sign_out", "reset")
        self._session_epoch += 1
        self.state.reset()
        self.hints.bind_user(None)

    async def load_profile(self) -> None:
        user_id = self.state.user_id
        if user_id is None:
            return
        epoch = self._session_epoch
        self.state.phase = Phase.LOADING_PROFILE
        self.state.profile_error = None
        try:
            profile = await self.data_source.load_profile(user_id)
        except Exception as exc:
            if epoch != self._session_epoch:
                return
            self.state.profile_error = ErrorMapper.to_payload(exc)
            self.state.phase = Phase.PROFILE_FAILED
            self._log("load_profile", "failed", self.state.profile_error["code"])
            return
        if epoch != self._session_epoch:
            self._log("load_profile", "discarded_stale")
            return
        self.state.profile = profile
        self._log("load_profile", "success")
        await self.resolve_stores()

    async def retry_profile(self) -> None:
        await self.load_profile()

    # Stores

    async def resolve_stores(self) -> None:
        profile = self.state.profile
        if profile is None:
            return
        epoch = self._session_epoch
        self._store_scope_token += 1
        token = self._store_scope_token
        if self.state.active_store_id is None:
            self.state.phase = Phase.RESOLVING_STORES
        try:
            scope = await self.data_source.resolve_stores(profile)
        except Exception as exc:
            if epoch != self._session_epoch or token != self._store_scope_token:
                return
            payload = self._notify(exc, source="store_scope")
            self._log("resolve_stores", "failed", payload["code"])
            return
        if epoch != self._session_epoch or token != self._store_scope_token:
            self._log("resolve_stores", "discarded_stale")
            return
        self.state.stores = list(scope.stores)
        self.state.can_switch_stores = scope.can_switch_stores
        await self._validate_store()

    async def _validate_store(self) -> None:
        candidates = self.state.stores
        if not candidates:
            self.state.clear_store_selection()
            self.hints.remove(STORE_HINT_KEY)
            self.hints.remove(DEPARTMENT_HINT_KEY)
            self.state.switching = False
            self.state.phase = Phase.NO_ACCESS
            self._log("store_selection", "no_stores")
            return

        current = self.state.active_store_id
        if StoreSelectionPolicy.find(candidates, current) is not None:
            return
        if current is not None:
            self._log("store_selection", "rejected", current)

        hint = self.hints.get(STORE_HINT_KEY)
        chosen = StoreSelectionPolicy.select(candidates, hint)
        if hint and chosen.id != hint:
            self._log("store_hint", "rejected", hint)
        await self._activate_store(chosen.id, "restored" if chosen.id == hint else "default")

    async def select_store(self, store_id: str) -> bool:
        if self.state.profile is None or StoreSelectionPolicy.find(self.state.stores, store_id) is None:
            self._log("select_store", "rejected", store_id)
            return False
        if store_id == self.state.active_store_id:
            self._log("select_store", "noop")
            return True
        await self._activate_store(store_id, "user")
        return True

    async def _activate_store(self, store_id: str, outcome: str) -> None:
        self.state.active_store_id = store_id
        self.state.store_generation = next(self._generations)
        self.state.clear_department_selection()
        self.state.switching = True
        self.hints.set(STORE_HINT_KEY, store_id)
        self._log("store_activated", outcome)
        await self.resolve_departments()

    # Departments

    async def resolve_departments(self) -> None:
        store_id = self.state.active_store_id
        profile = self.state.profile
        if store_id is None or profile is None:
            return
        epoch = self._session_epoch
        self._department_scope_token += 1
        token = self._department_scope_token
        store_generation = self.state.store_generation
        if self.state.active_department_id is None:
            self.state.phase = Phase.RESOLVING_DEPARTMENTS
        try:
            departments = await self.data_source.resolve_departments(profile, store_id)
        except Exception as exc:
            if self._departments_stale(epoch, token, store_generation):
                return
            payload = self._notify(exc, source="department_scope")
            self.state.switching = False
            self._log("resolve_departments", "failed", payload["code"])
            return
        if self._departments_stale(epoch, token, store_generation):
            self._log("resolve_departments", "discarded_stale")
            return

        in_store = [department for department in departments if department.store_id == store_id]
        if len(in_store) != len(departments):
            self._log("resolve_departments", "filtered_foreign", str(len(departments) - len(in_store)))
        self.state.departments = in_store
        self._validate_department()

    def _departments_stale(self, epoch: int, token: int, store_generation: int) -> bool:
        return (
            epoch != self._session_epoch
            or token != self._department_scope_token
            or store_generation != self.state.store_generation
        )

    def _validate_department(self) -> None:
        store_id = self.state.active_store_id
        candidates = self.state.departments
        if store_id is None or candidates is None:
            return

        if not candidates:
            self.state.clear_department_selection(keep_candidates=True)
            self.hints.remove(DEPARTMENT_HINT_KEY)
            self.state.switching = False
            self.state.phase = Phase.READY
            self._log("department_selection", "empty")
            return

        current = self.state.active_department_id
        if current is not None:
            if DepartmentSelectionPolicy.find(candidates, current, store_id) is not None:
                self.state.phase = Phase.READY
                return
            self._log("department_selection", "rejected", current)
            self.state.clear_department_selection(keep_candidates=True)
            self.state.switching = False

        hint = self.hints.get(DEPARTMENT_HINT_KEY)
        chosen = DepartmentSelectionPolicy.select(candidates, hint, store_id, self.preferred_department)
        if chosen is None:
            return
        if hint and chosen.id != hint:
            self._log("department_hint", "rejected", hint)
        self._activate_department(chosen.id, "restored" if chosen.id == hint else "default")

    async def select_department(self, department_id: str) -> bool:
        candidates = self.state.departments or []
        if DepartmentSelectionPolicy.find(candidates, department_id, self.state.active_store_id) is None:
            self._log("select_department", "rejected", department_id)
            return False
        if department_id == self.state.active_department_id:
            self._log("select_department", "noop")
            return True
        self._activate_department(department_id, "user")
        return True

    def _activate_department(self, department_id: str, outcome: str) -> None:
        self.state.clear_dependent_data()
        self.state.active_department_id = department_id
        self.state.department_generation = next(self._generations)
        self.hints.set(DEPARTMENT_HINT_KEY, department_id)
        self.state.phase = Phase.READY
        self._log("department_activated", outcome)
        self._enqueue_loaders(LOADER_SLOTS)

    # Dependent data

    async def set_period(self, period: ReportingPeriod) -> None:
        if period == self.state.period:
            return
        self.state.period = period
        if self.state.active_department_id is None:
            return
        for slot_name in PERIOD_SLOTS:
            slot = self.state.slots[slot_name]
            slot.data = None
            slot.status = SlotStatus.IDLE
        self._enqueue_loaders(PERIOD_SLOTS)

    def refresh(self, record_type: str) -> None:
        slots = RECORD_TYPE_SLOTS.get(record_type)
        if not slots or self.state.active_department_id is None:
            return
        self._log("realtime_refresh", "enqueued", record_type)
        self._enqueue_loaders(slots)

    def _enqueue_loaders(self, slot_names: Iterable[str]) -> None:
        department_id = self.state.active_department_id
        if department_id is None:
            return
        loop = asyncio.get_running_loop()
        for slot_name in slot_names:
            slot = self.state.slots[slot_name]
            slot.request_token = next(self._request_tokens)
            slot.key = self._slot_key(slot_name)
            slot.status = SlotStatus.LOADING
            slot.error = None
            task = loop.create_task(
                self._run_loader(slot_name, department_id, self.state.period, slot.request_token, slot.key)
            )
            self._track(task)

    async def _run_loader(
        self,
        slot_name: str,
        department_id: str,
        period: ReportingPeriod,
        token: int,
        key: tuple,
    ) -> None:
        try:
            data = await self._fetch(slot_name, department_id, period)
        except Exception as exc:
            if self._slot_stale(slot_name, token, key):
                self._log(f"load_{slot_name}", "discarded_stale")
                return
            slot = self.state.slots[slot_name]
            slot.status = SlotStatus.FAILED
            slot.error = ErrorMapper.to_payload(exc)
            self._log(f"load_{slot_name}", "failed", slot.error["code"])
        else:
            if self._slot_stale(slot_name, token, key):
                self._log(f"load_{slot_name}", "discarded_stale")
                return
            slot = self.state.slots[slot_name]
            slot.data = data
            slot.status = SlotStatus.LOADED
        self._maybe_finish_switch()

    async def _fetch(self, slot_name: str, department_id: str, period: ReportingPeriod) -> Any:
        if slot_name == KPI_DEFINITIONS_SLOT:
            return await self.data_source.load_kpi_definitions(department_id)
        if slot_name == KPI_STATUS_SLOT:
            return await self.data_source.load_kpi_status(department_id, period)
        if slot_name == ROCK_COUNTS_SLOT:
            return await self.data_source.load_rock_counts(department_id, period)
        return await self.data_source.load_todo_counts(department_id)

    def _slot_key(self, slot_name: str) -> tuple:
        key: tuple = (self.state.department_generation, self.state.active_department_id)
        if slot_name in PERIOD_SLOTS:
            key += self.state.period.as_key()
        return key

    def _slot_stale(self, slot_name: str, token: int, key: tuple) -> bool:
        slot = self.state.slots[slot_name]
        return slot.request_token != token or self._slot_key(slot_name) != key

    def _maybe_finish_switch(self) -> None:
        if not self.state.switching or self.state.active_department_id is None:
            return
        if all(slot.settled for slot in self.state.slots.values()):
            self.state.switching = False
            self._log("switch", "completed")

    # Realtime

    def bind_realtime(self, bus: ChangeSubscriber) -> None:
        self._loop = asyncio.get_running_loop()
        for record_type in RECORD_TYPE_SLOTS:
            self._realtime_unsubscribers.append(bus.subscribe(record_type, self._realtime_callback(record_type)))

    def unbind_realtime(self) -> None:
        for unsubscribe in self._realtime_unsubscribers:
            unsubscribe()
        self._realtime_unsubscribers.clear()

    def _realtime_callback(self, record_type: str) -> Callable[[], None]:
        loop = self._loop

        def on_change() -> None:
            if loop is None or loop.is_closed():
                return
            loop.call_soon_threadsafe(self.refresh, record_type)

        return on_change

    # Housekeeping

    def dismiss_notice(self, notice_id: int) -> bool:
        return self.state.dismiss_notice(notice_id)

    async def drain(self) -> None:
        """Wait until no loader, session or realtime task is pending."""
        while True:
            await asyncio.sleep(0)
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def close(self) -> None:
        self.unbind_realtime()
        if self._session_unsubscribe is not None:
            self._session_unsubscribe()
            self._session_unsubscribe = None

    def _spawn(self, factory: Callable[..., Any], *args: Any) -> None:
        self._track(asyncio.ensure_future(factory(*args)))

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _notify(self, exc: Exception, *, source: str) -> dict:
        payload = ErrorMapper.to_payload(exc)
        self.state.add_notice(
            payload["code"],
            payload["message"],
            suggestion=payload["suggestion"],
            trace_id=payload["trace_id"],
            source=source,
            retryable=payload["retryable"],
        )
        return payload

    def _log(self, action: str, outcome: str, detail: str | None = None) -> None:
        profile = self.state.profile
        event = selection_event(
            action,
            outcome,
            user_id=self.state.user_id,
            role=profile.role if profile else None,
            store_id=self.state.active_store_id,
            department_id=self.state.active_department_id,
            detail=detail,
        )
        log_selection(logger, event)
