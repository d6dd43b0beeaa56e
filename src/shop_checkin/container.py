from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .checkins.meal_allowance import StandardMealAllowanceCalculator
from .checkins.mysql_checkin_repository import MySQLCheckInRepository
from .checkins.repository import CheckInRepository
from .checkins.service import CheckInService
from .common.business_time import BusinessCalendar
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .network.classifier import NetworkTrustClassifier
from .network.ipinfo_client import IpInfoClient
from .reports.service import CheckInReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    checkins_repo: CheckInRepository

    checkin_service: CheckInService
    report_service: CheckInReportService


def build_container(*, settings: ModuleType) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG))

    employees_repo = MySQLEmployeeRepository(conn)
    checkins_repo = MySQLCheckInRepository(conn)

    calendar = BusinessCalendar(settings.BUSINESS_UTC_OFFSET_HOURS)
    network = NetworkTrustClassifier(
        IpInfoClient(
            base_url=settings.IPINFO_URL,
            token=settings.IPINFO_TOKEN,
            timeout=settings.IPINFO_TIMEOUT_SECONDS,
        ),
        isp_names=settings.SHOP_ISP_NAMES,
        asns=settings.SHOP_ASNS,
    )
    checkin_service = CheckInService(
        checkins_repo,
        employees_repo,
        network,
        calendar=calendar,
        meal_allowance=StandardMealAllowanceCalculator(settings.MEAL_ALLOWANCE_AMOUNT),
    )
    report_service = CheckInReportService(checkins_repo, calendar)

    return Container(
        employees_repo=employees_repo,
        checkins_repo=checkins_repo,
        checkin_service=checkin_service,
        report_service=report_service,
    )
