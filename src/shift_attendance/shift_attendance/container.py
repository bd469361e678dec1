from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .attendance.service import AttendanceService
from .attendance.store_attendance_repository import StoreAttendanceRepository
from .core.constants import DEFAULT_ABSENCE_ALLOWANCE_PER_MONTH, DEFAULT_WORKING_DAYS, WEEKDAY_LABELS
from .core.enums import Role
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_store import MySQLKeyedStore
from .database.store import InMemoryKeyedStore, KeyedStore
from .notifications.repository import StoreNotificationRepository
from .notifications.service import NotificationService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .reconciliation.service import AbsenceService, ReconciliationService
from .requests.service import RequestService
from .requests.store_leave_repository import StoreLeaveRepository
from .requests.store_wfh_repository import StoreWfhRepository
from .requests.wfh_service import WfhService
from .shifts.model import FridayExemption, ShiftConfig
from .users.service import UserService
from .users.store_user_repository import StoreUserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: KeyedStore
    shift_config: ShiftConfig

    users_repo: StoreUserRepository
    attendance_repo: StoreAttendanceRepository
    leaves_repo: StoreLeaveRepository
    wfh_repo: StoreWfhRepository
    notifications_repo: StoreNotificationRepository

    user_service: UserService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService
    reconciliation_service: ReconciliationService
    notification_service: NotificationService
    request_service: RequestService
    wfh_service: WfhService
    absence_service: AbsenceService


def _exempt_roles(values) -> tuple[Role, ...]:
    roles = []
    for value in values or ():
        try:
            roles.append(Role(str(value).strip().upper()))
        except ValueError:
            logger.warning("Ignoring unknown auto-checkout exempt role %r", value)
    return tuple(roles)


def _working_days(values) -> tuple[str, ...]:
    days = []
    for value in values or ():
        label = str(value).strip().title()[:3]
        if label in WEEKDAY_LABELS:
            days.append(label)
        else:
            logger.warning("Ignoring unknown working day %r", value)
    return tuple(days)


def build_store(settings: Any) -> KeyedStore:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        store = MySQLKeyedStore(conn)
        store.ensure_schema()
        return store
    if backend != "memory":
        logger.warning("Unknown STORE_BACKEND %r, using in-memory store", backend)
    return InMemoryKeyedStore()


def build_container(settings: Any, *, store: Optional[KeyedStore] = None) -> Container:
    store = store if store is not None else build_store(settings)
    shift_config = ShiftConfig.from_settings(settings)
    calculator = StandardPayrollCalculator()

    users_repo = StoreUserRepository(store)
    attendance_repo = StoreAttendanceRepository(store)
    leaves_repo = StoreLeaveRepository(store)
    wfh_repo = StoreWfhRepository(store)
    notifications_repo = StoreNotificationRepository(store)

    notification_service = NotificationService(notifications_repo)
    user_service = UserService(users_repo, attendance_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        shift_config,
        exemption=FridayExemption.from_settings(settings),
    )
    payroll_report_service = PayrollReportService(
        attendance_repo, users_repo, leaves_repo, shift_config, calculator=calculator
    )
    reconciliation_service = ReconciliationService(
        attendance_repo,
        users_repo,
        shift_config,
        auto_checkout_enabled=bool(getattr(settings, "AUTO_CHECKOUT_ENABLED", False)),
        auto_checkout_exempt_roles=_exempt_roles(getattr(settings, "AUTO_CHECKOUT_EXEMPT_ROLES", ())),
    )
    request_service = RequestService(leaves_repo, users_repo, notification_service, calculator=calculator)
    wfh_service = WfhService(wfh_repo, users_repo, notification_service)
    absence_service = AbsenceService(
        attendance_repo,
        users_repo,
        leaves_repo,
        wfh_repo,
        shift_config,
        working_days=_working_days(getattr(settings, "WORKING_DAYS", DEFAULT_WORKING_DAYS)),
        allowance=int(getattr(settings, "ABSENCE_ALLOWANCE_PER_MONTH", DEFAULT_ABSENCE_ALLOWANCE_PER_MONTH)),
    )

    return Container(
        store=store,
        shift_config=shift_config,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        wfh_repo=wfh_repo,
        notifications_repo=notifications_repo,
        user_service=user_service,
        attendance_service=attendance_service,
        payroll_report_service=payroll_report_service,
        reconciliation_service=reconciliation_service,
        notification_service=notification_service,
        request_service=request_service,
        wfh_service=wfh_service,
        absence_service=absence_service,
    )
