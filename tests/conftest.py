import json

import pytest


@pytest.fixture
def full_scan_plan() -> dict:
    return {
        "query_block": {
            "select_id": 1,
            "cost_info": {"query_cost": "507.25"},
            "table": {
                "table_name": "orders",
                "access_type": "ALL",
                "rows_examined_per_scan": 5000,
                "rows_produced_per_join": 500,
                "filtered": "10.00",
                "cost_info": {
                    "read_cost": "457.25",
                    "eval_cost": "50.00",
                    "prefix_cost": "507.25",
                    "data_read_per_join": "78K",
                },
                "used_columns": ["id", "customer_id", "status"],
                "attached_condition": "(`shop`.`orders`.`status` = 'open')",
            },
        }
    }


@pytest.fixture
def const_plan() -> dict:
    return {
        "query_block": {
            "select_id": 1,
            "cost_info": {"query_cost": "1.00"},
            "table": {
                "table_name": "users",
                "access_type": "const",
                "possible_keys": ["PRIMARY"],
                "key": "PRIMARY",
                "rows_examined_per_scan": 1,
                "rows_produced_per_join": 1,
                "filtered": "100.00",
                "cost_info": {
                    "read_cost": "0.00",
                    "eval_cost": "0.10",
                    "prefix_cost": "0.00",
                    "data_read_per_join": "1K",
                },
                "used_columns": ["id", "name"],
            },
        }
    }


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.conn.cursors_closed += 1
        return False

    def execute(self, sql):
        self.conn.executed.append(sql)
        if self.conn.execute_error is not None:
            raise self.conn.execute_error
        statement = sql.removeprefix("EXPLAIN FORMAT=json ")
        self.conn.current = self.conn.plans.get(statement)

    def fetchone(self):
        if self.conn.current is None:
            return None
        return (self.conn.current,)


class FakeConnection:
    """Stands in for a pymysql connection; maps statements to EXPLAIN payloads."""

    def __init__(self, plans=None, execute_error=None):
        self.plans = {
            sql: json.dumps(plan) if isinstance(plan, dict) else plan
            for sql, plan in (plans or {}).items()
        }
        self.execute_error = execute_error
        self.executed: list[str] = []
        self.current = None
        self.cursors_closed = 0
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True


@pytest.fixture
def make_connection():
    return FakeConnection
