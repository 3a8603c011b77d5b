"""
Tests for the connection pool, schema provisioning and the persistence writer.
"""
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlalchemy import func, inspect, select

from payables.database import ConnectionPool, provision_schema
from payables.exceptions import PersistenceFailed
from payables.models import PayableModel
from payables.pipeline.writer import insert_payable
from payables.schemas import PayableRecord, SupplierInfo, SupplierType

RECORD = PayableRecord(
    amount=Decimal("1500.00"),
    category="Aluguel",
    cost_center="Matriz",
    supplier=SupplierInfo(name="Acme", document="12345678900", type=SupplierType.INDIVIDUAL),
)


def _count_rows(pool):
    with pool.acquire() as conn:
        return conn.execute(select(func.count()).select_from(PayableModel.__table__)).scalar_one()


# =====================================================================
# Schema provisioning
# =====================================================================
class TestProvisioning:
    def test_creates_table(self, provisioned_pool):
        columns = {
            c["name"] for c in inspect(provisioned_pool.engine).get_columns("contas_a_pagar")
        }
        assert columns == {
            "id", "valor", "classe", "centroCusto",
            "fornecedorNome", "fornecedorDoc", "tipoFornecedor", "dataRegistro",
        }

    def test_idempotent_keeps_data(self, provisioned_pool):
        with provisioned_pool.acquire() as conn:
            insert_payable(conn, RECORD)
        provision_schema(provisioned_pool)
        provision_schema(provisioned_pool)
        assert _count_rows(provisioned_pool) == 1
        assert provisioned_pool.held == 0

    def test_unreachable_store(self, tmp_path):
        pool = ConnectionPool(f"sqlite:///{tmp_path / 'nope' / 'x.db'}")
        with pytest.raises(PersistenceFailed):
            provision_schema(pool)
        assert pool.held == 0


# =====================================================================
# Persistence writer
# =====================================================================
class TestWriter:
    def test_returns_positive_ids(self, provisioned_pool):
        with provisioned_pool.acquire() as conn:
            first = insert_payable(conn, RECORD)
            second = insert_payable(conn, RECORD)
        assert first > 0
        assert second > first

    def test_stores_canonical_values(self, provisioned_pool):
        with provisioned_pool.acquire() as conn:
            row_id = insert_payable(conn, RECORD)
            row = conn.execute(
                select(PayableModel.__table__).where(PayableModel.__table__.c.id == row_id)
            ).mappings().one()
        assert Decimal(row["valor"]) == Decimal("1500.00")
        assert row["classe"] == "Aluguel"
        assert row["centroCusto"] == "Matriz"
        assert row["fornecedorDoc"] == "12345678900"
        assert row["tipoFornecedor"] == SupplierType.INDIVIDUAL
        assert row["dataRegistro"] is not None

    def test_injection_is_inert(self, provisioned_pool):
        record = RECORD.model_copy(update={"category": "x'); DROP TABLE contas_a_pagar; --"})
        with provisioned_pool.acquire() as conn:
            insert_payable(conn, record)
        assert _count_rows(provisioned_pool) == 1

    def test_missing_table_raises(self, pool):
        with pytest.raises(PersistenceFailed) as info:
            with pool.acquire() as conn:
                insert_payable(conn, RECORD)
        assert info.value.cause is not None
        assert pool.held == 0


# =====================================================================
# Connection pool
# =====================================================================
class TestConnectionPool:
    def test_released_on_exception(self, pool):
        with pytest.raises(RuntimeError):
            with pool.acquire():
                assert pool.held == 1
                raise RuntimeError("boom")
        assert pool.held == 0

    def test_release_twice_is_noop(self, pool):
        conn = pool.checkout()
        pool.release(conn)
        pool.release(conn)
        assert pool.held == 0

    def test_connections_are_reused(self, pool):
        for _ in range(5):
            with pool.acquire():
                pass
        assert pool.engine.pool.checkedout() == 0
        assert pool.engine.pool.checkedin() == 1

    def test_rejects_zero_capacity(self, db_url):
        with pytest.raises(ValueError):
            ConnectionPool(db_url, size=0)

    def test_waits_when_exhausted(self, db_url):
        pool = ConnectionPool(db_url, size=1, timeout=0.2)
        with pool.acquire():
            with pytest.raises(PersistenceFailed):
                pool.checkout()
        assert pool.held == 0
        pool.dispose()

    def test_concurrent_operations_never_exceed_capacity(self, provisioned_pool):
        def operation(i):
            with provisioned_pool.acquire() as conn:
                if i % 4 == 0:
                    raise RuntimeError("simulated failure")
                return insert_payable(conn, RECORD)

        with ThreadPoolExecutor(max_workers=12) as executor:
            futures = [executor.submit(operation, i) for i in range(40)]
        results = [f.exception() or f.result() for f in futures]

        ok = [r for r in results if isinstance(r, int)]
        assert len(ok) + sum(isinstance(r, Exception) for r in results) == 40
        assert provisioned_pool.held == 0
        assert provisioned_pool.engine.pool.checkedout() == 0
        assert provisioned_pool.peak_held <= provisioned_pool.capacity
        assert _count_rows(provisioned_pool) == len(ok)
