from __future__ import annotations

import logging
from typing import Iterable

import mysql.connector

from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS employees (
        employee_id VARCHAR(100) NOT NULL PRIMARY KEY,
        department VARCHAR(100) NULL,
        role VARCHAR(20) NOT NULL DEFAULT 'employee',
        pin_hash VARCHAR(255) NULL,
        is_active TINYINT(1) NOT NULL DEFAULT 1,
        created_at DATETIME NULL
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS attendance_records (
        employee_id VARCHAR(100) NOT NULL PRIMARY KEY,
        status VARCHAR(20) NOT NULL,
        out_at DATETIME NULL,
        return_at DATETIME NULL,
        expected_return_at DATETIME NULL,
        place VARCHAR(255) NULL,
        last_updated DATETIME NULL,
        version INT NOT NULL DEFAULT 1
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
    """
    CREATE TABLE IF NOT EXISTS outbound_logs (
        log_id BIGINT NOT NULL AUTO_INCREMENT PRIMARY KEY,
        actor VARCHAR(100) NOT NULL,
        action VARCHAR(20) NOT NULL,
        text VARCHAR(500) NOT NULL,
        created_at DATETIME NOT NULL,
        employee_id VARCHAR(100) NULL,
        INDEX ix_outbound_logs_created_at (created_at)
    ) CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci
    """,
)


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _exec_statements(cur, statements: Iterable[str]) -> None:
    for stmt in statements:
        cur.execute(stmt)


def apply_schema(conn_factory: DatabaseConnection) -> None:
    try:
        ensure_database_exists(conn_factory)
        conn = conn_factory.connect()
        try:
            cur = conn.cursor()
            _exec_statements(cur, SCHEMA)
            conn.commit()
        finally:
            conn.close()
    except mysql.connector.Error as exc:
        raise StoreUnavailable(f"Could not apply schema: {exc}") from exc
    logger.info("Schema ready on %s", conn_factory.config.database)
