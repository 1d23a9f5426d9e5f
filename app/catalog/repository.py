from datetime import UTC, datetime

import aiosqlite
from pydantic import BaseModel

from app.catalog.models import CatalogTable


class CatalogRepository:
    def __init__(self, db: aiosqlite.Connection, table: CatalogTable) -> None:
        self._db = db
        self._table = table

    async def get_by_id(self, entry_id: int) -> dict | None:
        cursor = await self._db.execute(
            f"SELECT * FROM {self._table.table} WHERE id = ?",
            (entry_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return dict(row)

    async def list_all(self) -> list[dict]:
        order_by = "sort_order, name" if self._table.sortable else "id"
        cursor = await self._db.execute(f"SELECT * FROM {self._table.table} ORDER BY {order_by}")
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def create(self, data: BaseModel) -> dict:
        values = data.model_dump()
        columns = list(self._table.fields)
        params: list = [values[col] for col in columns]

        if self._table.sortable:
            columns.append("sort_order")
            params.append(await self._next_sort_order())

        columns.append("created_at")
        params.append(datetime.now(UTC).isoformat())

        cursor = await self._db.execute(
            f"""
            INSERT INTO {self._table.table} ({", ".join(columns)})
            VALUES ({", ".join("?" for _ in columns)})
            """,
            params,
        )
        await self._db.commit()

        row = await self.get_by_id(cursor.lastrowid)
        if row is None:
            raise RuntimeError(f"Inserted {self._table.kind} could not be read back")
        return row

    async def delete(self, entry_id: int) -> bool:
        cursor = await self._db.execute(
            f"DELETE FROM {self._table.table} WHERE id = ?",
            (entry_id,),
        )
        await self._db.commit()
        return cursor.rowcount > 0

    async def update_order(self, entry_id: int, new_order: int) -> dict | None:
        cursor = await self._db.execute(
            f"UPDATE {self._table.table} SET sort_order = ? WHERE id = ?",
            (new_order, entry_id),
        )
        await self._db.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_by_id(entry_id)

    async def _next_sort_order(self) -> int:
        cursor = await self._db.execute(
            f"SELECT COALESCE(MAX(sort_order), -1) + 1 AS next FROM {self._table.table}"
        )
        row = await cursor.fetchone()
        return int(row["next"]) if row else 0
