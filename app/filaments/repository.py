from datetime import UTC, datetime

import aiosqlite

from app.filaments.schemas import FilamentCreate

FILAMENT_COLUMNS = (
    "name",
    "manufacturer",
    "material",
    "color_name",
    "color_code",
    "diameter",
    "print_temp",
    "total_weight",
    "remaining_percentage",
    "purchase_date",
    "purchase_price",
    "status",
    "spool_type",
    "dryer_count",
    "last_drying_date",
    "storage_location",
)

REFERENCE_COLUMNS = frozenset(
    {"manufacturer", "material", "color_name", "color_code", "diameter", "storage_location"}
)


class FilamentRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def get_by_id(self, filament_id: int, user_id: int) -> dict | None:
        cursor = await self._db.execute(
            "SELECT * FROM filaments WHERE id = ? AND user_id = ?",
            (filament_id, user_id),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return dict(row)

    async def list_by_user(self, user_id: int) -> list[dict]:
        cursor = await self._db.execute(
            "SELECT * FROM filaments WHERE user_id = ? ORDER BY id",
            (user_id,),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def create(self, data: FilamentCreate, user_id: int) -> dict:
        now = datetime.now(UTC).isoformat()
        values = data.model_dump()
        columns = ", ".join(FILAMENT_COLUMNS)
        placeholders = ", ".join("?" for _ in FILAMENT_COLUMNS)

        cursor = await self._db.execute(
            f"""
            INSERT INTO filaments (user_id, {columns}, created_at, updated_at)
            VALUES (?, {placeholders}, ?, ?)
            """,
            (user_id, *(values[col] for col in FILAMENT_COLUMNS), now, now),
        )
        await self._db.commit()

        row = await self.get_by_id(cursor.lastrowid, user_id)
        if row is None:
            raise RuntimeError("Inserted filament could not be read back")
        return row

    async def update(self, filament_id: int, patch: dict, user_id: int) -> dict | None:
        unknown = set(patch) - set(FILAMENT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown filament columns: {sorted(unknown)}")
        if not patch:
            return await self.get_by_id(filament_id, user_id)

        set_clauses = [f"{col} = ?" for col in patch]
        params: list = list(patch.values())
        set_clauses.append("updated_at = ?")
        params.append(datetime.now(UTC).isoformat())
        params.extend([filament_id, user_id])

        cursor = await self._db.execute(
            f"UPDATE filaments SET {', '.join(set_clauses)} WHERE id = ? AND user_id = ?",
            params,
        )
        await self._db.commit()
        if cursor.rowcount == 0:
            return None
        return await self.get_by_id(filament_id, user_id)

    async def delete(self, filament_id: int, user_id: int) -> bool:
        cursor = await self._db.execute(
            "DELETE FROM filaments WHERE id = ? AND user_id = ?",
            (filament_id, user_id),
        )
        await self._db.commit()
        return cursor.rowcount > 0

    async def count_referencing(self, column: str, value: object) -> int:
        """Count filaments of any owner whose column equals the value (NOCASE for text)."""
        if column not in REFERENCE_COLUMNS:
            raise ValueError(f"Column '{column}' is not a catalog reference")
        cursor = await self._db.execute(
            f"SELECT COUNT(*) AS n FROM filaments WHERE {column} = ? COLLATE NOCASE",
            (value,),
        )
        row = await cursor.fetchone()
        return int(row["n"]) if row else 0
