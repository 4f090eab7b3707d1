"""
SQLite 어댑터 테스트

SQLiteAdapter 및 관련 함수 테스트.
"""

import asyncio
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
)
from core.errors import StorageError


class TestCreateConnection:
    """create_connection 테스트"""

    @pytest.mark.asyncio
    async def test_create_connection(self, tmp_path: Path) -> None:
        """연결 생성"""
        db_path = tmp_path / "test.db"

        conn = await create_connection(db_path)

        assert conn is not None

        # WAL 모드 확인
        cursor = await conn.execute("PRAGMA journal_mode")
        row = await cursor.fetchone()
        assert row[0].upper() == "WAL"

        await conn.close()

    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        """부모 디렉토리 생성"""
        db_path = tmp_path / "subdir" / "test.db"

        conn = await create_connection(db_path)

        assert db_path.parent.exists()

        await conn.close()

    @pytest.mark.asyncio
    async def test_in_memory(self) -> None:
        """메모리 DB는 디렉토리 생성 없이 연결"""
        conn = await create_connection(":memory:")

        cursor = await conn.execute("SELECT 1")
        row = await cursor.fetchone()
        assert row[0] == 1

        await conn.close()


class TestSQLiteAdapter:
    """SQLiteAdapter 테스트"""

    @pytest_asyncio.fixture
    async def adapter(self, tmp_path: Path) -> SQLiteAdapter:
        """어댑터 픽스처"""
        adapter = SQLiteAdapter(tmp_path / "test.db")
        await adapter.connect()
        yield adapter
        await adapter.close()

    @pytest.mark.asyncio
    async def test_connect_and_close(self, tmp_path: Path) -> None:
        """연결 및 종료"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        assert adapter.is_connected is False

        await adapter.connect()
        assert adapter.is_connected is True

        await adapter.close()
        assert adapter.is_connected is False

    @pytest.mark.asyncio
    async def test_execute_without_connection(self, tmp_path: Path) -> None:
        """연결 전 실행 시 에러"""
        adapter = SQLiteAdapter(tmp_path / "test.db")

        with pytest.raises(RuntimeError):
            await adapter.execute("SELECT 1")

    @pytest.mark.asyncio
    async def test_execute(self, adapter: SQLiteAdapter) -> None:
        """SQL 실행"""
        await adapter.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, name TEXT)")
        await adapter.execute("INSERT INTO test (name) VALUES (?)", ("테스트",))
        await adapter.commit()

        row = await adapter.fetchone("SELECT name FROM test WHERE id = 1")
        assert row[0] == "테스트"

    @pytest.mark.asyncio
    async def test_fetch_dict(self, adapter: SQLiteAdapter) -> None:
        """컬럼명 dict 조회"""
        await adapter.execute("CREATE TABLE items (name TEXT, qty INTEGER)")
        await adapter.executemany(
            "INSERT INTO items (name, qty) VALUES (?, ?)",
            [("A", 1), ("B", 2)],
        )
        await adapter.commit()

        row = await adapter.fetchone_dict("SELECT * FROM items WHERE name = ?", ("A",))
        assert row == {"name": "A", "qty": 1}

        rows = await adapter.fetchall_dict("SELECT * FROM items ORDER BY name")
        assert [r["qty"] for r in rows] == [1, 2]

        assert await adapter.fetchone_dict("SELECT * FROM items WHERE name = 'Z'") is None
        assert await adapter.fetchall_dict("SELECT * FROM items WHERE qty > 5") == []

    @pytest.mark.asyncio
    async def test_sql_error_raises_storage_error(self, adapter: SQLiteAdapter) -> None:
        """SQL 실패는 StorageError로 변환"""
        with pytest.raises(StorageError):
            await adapter.execute("SELECT * FROM missing_table")

    @pytest.mark.asyncio
    async def test_transaction_commit(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 커밋"""
        await adapter.execute("CREATE TABLE tx_test (id INTEGER)")
        await adapter.commit()

        async with adapter.transaction() as conn:
            await conn.execute("INSERT INTO tx_test (id) VALUES (1)")
            await conn.execute("INSERT INTO tx_test (id) VALUES (2)")

        rows = await adapter.fetchall("SELECT id FROM tx_test")
        assert len(rows) == 2

    @pytest.mark.asyncio
    async def test_transaction_rollback(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 롤백"""
        await adapter.execute("CREATE TABLE tx_test2 (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO tx_test2 (id) VALUES (1)")
                raise ValueError("의도적 에러")

        rows = await adapter.fetchall("SELECT id FROM tx_test2")
        assert len(rows) == 0
        assert adapter.in_transaction is False

    @pytest.mark.asyncio
    async def test_nested_transaction_joins_outer(self, adapter: SQLiteAdapter) -> None:
        """중첩 트랜잭션은 바깥 트랜잭션에 합류 (바깥 실패 시 모두 롤백)"""
        await adapter.execute("CREATE TABLE nested (id INTEGER)")
        await adapter.commit()

        with pytest.raises(ValueError):
            async with adapter.transaction():
                await adapter.execute("INSERT INTO nested (id) VALUES (1)")
                async with adapter.transaction():
                    assert adapter.in_transaction is True
                    await adapter.execute("INSERT INTO nested (id) VALUES (2)")
                raise ValueError("바깥 실패")

        rows = await adapter.fetchall("SELECT id FROM nested")
        assert rows == []

    @pytest.mark.asyncio
    async def test_transactions_serialized_across_tasks(
        self, adapter: SQLiteAdapter
    ) -> None:
        """다른 태스크의 트랜잭션은 순차 실행"""
        await adapter.execute("CREATE TABLE seq (task TEXT, step INTEGER)")
        await adapter.commit()

        async def worker(name: str) -> None:
            async with adapter.transaction():
                await adapter.execute("INSERT INTO seq VALUES (?, 1)", (name,))
                await asyncio.sleep(0.01)
                await adapter.execute("INSERT INTO seq VALUES (?, 2)", (name,))

        await asyncio.gather(worker("a"), worker("b"))

        rows = await adapter.fetchall("SELECT task, step FROM seq ORDER BY rowid")
        tasks = [r[0] for r in rows]
        # 한 태스크의 두 단계가 연속으로 기록됨
        assert tasks[0] == tasks[1]
        assert tasks[2] == tasks[3]

    @pytest.mark.asyncio
    async def test_reader_waits_for_other_task_transaction(
        self, adapter: SQLiteAdapter
    ) -> None:
        """다른 태스크의 미커밋 변경은 읽기에 보이지 않음 (롤백 후 커밋 값 조회)"""
        await adapter.execute("CREATE TABLE bal (id INTEGER PRIMARY KEY, amount TEXT)")
        await adapter.execute("INSERT INTO bal VALUES (1, '50')")
        await adapter.commit()

        started = asyncio.Event()
        release = asyncio.Event()

        async def writer() -> None:
            async with adapter.transaction():
                await adapter.execute("UPDATE bal SET amount = '80' WHERE id = 1")
                started.set()
                await release.wait()
                raise ValueError("의도적 롤백")

        writer_task = asyncio.create_task(writer())
        await started.wait()

        reader_task = asyncio.create_task(
            adapter.fetchone("SELECT amount FROM bal WHERE id = 1")
        )
        await asyncio.sleep(0.01)
        assert reader_task.done() is False

        release.set()
        with pytest.raises(ValueError):
            await writer_task

        row = await reader_task
        assert row[0] == "50"

    @pytest.mark.asyncio
    async def test_read_inside_own_transaction(self, adapter: SQLiteAdapter) -> None:
        """트랜잭션 보유 태스크는 자기 변경을 바로 조회"""
        await adapter.execute("CREATE TABLE own (id INTEGER PRIMARY KEY, amount TEXT)")
        await adapter.execute("INSERT INTO own VALUES (1, '50')")
        await adapter.commit()

        async with adapter.transaction():
            await adapter.execute("UPDATE own SET amount = '80' WHERE id = 1")
            row = await adapter.fetchone_dict("SELECT amount FROM own WHERE id = 1")
            assert row == {"amount": "80"}

    @pytest.mark.asyncio
    async def test_table_exists(self, adapter: SQLiteAdapter) -> None:
        """테이블 존재 확인"""
        assert await adapter.table_exists("nonexistent") is False

        await adapter.execute("CREATE TABLE existing (id INTEGER)")
        await adapter.commit()

        assert await adapter.table_exists("existing") is True

    @pytest.mark.asyncio
    async def test_context_manager(self, tmp_path: Path) -> None:
        """컨텍스트 매니저"""
        async with SQLiteAdapter(tmp_path / "ctx_test.db") as adapter:
            assert adapter.is_connected is True

        assert adapter.is_connected is False


class TestInitSchema:
    """init_schema 테스트"""

    @pytest.mark.asyncio
    async def test_init_schema_creates_tables(self, tmp_path: Path) -> None:
        """스키마 초기화 - 테이블 생성"""
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            await init_schema(adapter)

            for table in (
                "account",
                "ledger_transaction",
                "transfer",
                "debt",
                "debt_payment",
                "investment",
                "savings_goal",
                "goal_contribution",
            ):
                assert await adapter.table_exists(table) is True

    @pytest.mark.asyncio
    async def test_init_schema_idempotent(self, tmp_path: Path) -> None:
        """여러 번 호출해도 안전"""
        async with SQLiteAdapter(tmp_path / "schema_test.db") as adapter:
            await init_schema(adapter)
            await init_schema(adapter)

            columns = await adapter.get_table_info("account")
            names = {c["name"] for c in columns}
            assert {"balance", "version", "last_rollover_at"} <= names
