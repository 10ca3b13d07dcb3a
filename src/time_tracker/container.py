from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .entries.ledger import SessionLedger
from .entries.sql_entry_repository import SQLTimeEntryRepository
from .reports.service import ReportService
from .summary.aggregator import Aggregator
from .users.service import AuthService
from .users.sql_user_repository import SQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: SQLUserRepository
    entries_repo: SQLTimeEntryRepository

    auth_service: AuthService
    ledger: SessionLedger
    aggregator: Aggregator
    report_service: ReportService

    def close(self) -> None:
        self.conn.close()


def build_container(*, db_config: DBConfig, jwt_secret: str, token_days: int) -> Container:
    conn = DatabaseConnection(db_config).open()

    users_repo = SQLUserRepository(conn)
    entries_repo = SQLTimeEntryRepository(conn)

    auth_service = AuthService(users_repo, secret=jwt_secret, token_days=token_days)
    ledger = SessionLedger(entries_repo)
    aggregator = Aggregator(entries_repo)
    report_service = ReportService(ledger, users_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        entries_repo=entries_repo,
        auth_service=auth_service,
        ledger=ledger,
        aggregator=aggregator,
        report_service=report_service,
    )
