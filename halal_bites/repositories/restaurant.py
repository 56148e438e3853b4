from typing import Any, Dict, List, Optional
import uuid

from halal_bites.repositories.base import BaseRepository

# Columns a write may touch; payload keys come from the pydantic write models.
WRITABLE_COLUMNS = frozenset({
    "name",
    "cuisine_type",
    "address",
    "description",
    "price_range",
    "has_prayer_room",
    "has_outdoor_seating",
    "has_high_chair",
    "serves_alcohol",
    "is_fully_halal",
    "is_zabiha",
    "is_partially_halal",
    "partially_halal_chicken",
    "partially_halal_lamb",
    "partially_halal_beef",
    "partially_halal_goat",
    "zabiha_chicken",
    "zabiha_lamb",
    "zabiha_beef",
    "zabiha_goat",
    "zabiha_verified",
    "zabiha_verified_by",
    "image_url",
    "brand_id",
    "latitude",
    "longitude",
    "is_featured",
})


def _check_columns(data: Dict[str, Any]) -> None:
    unknown = set(data) - WRITABLE_COLUMNS
    if unknown:
        raise ValueError(f"Unknown restaurant columns: {sorted(unknown)}")


class RestaurantRepository(BaseRepository):
    """
    Repository for restaurant reads and writes.
    """

    table = "restaurants"

    def list_with_comment_counts(self, featured: bool = False) -> List[Dict[str, Any]]:
        """Newest first, each row carrying `comment_count`."""
        where = "WHERE r.is_featured" if featured else ""
        sql = f"""
            SELECT r.*, COUNT(c.id) AS comment_count
            FROM restaurants r
            LEFT JOIN comments c ON c.restaurant_id = r.id
            {where}
            GROUP BY r.id
            ORDER BY r.created_at DESC
        """
        return self.fetchall(sql)

    def list_missing_coordinates(self) -> List[Dict[str, Any]]:
        sql = """
            SELECT id, name, address
            FROM restaurants
            WHERE latitude IS NULL OR longitude IS NULL
            ORDER BY created_at
        """
        return self.fetchall(sql)

    def get(self, restaurant_id: str) -> Optional[Dict[str, Any]]:
        sql = """
            SELECT r.*,
                   (SELECT COUNT(*) FROM comments c WHERE c.restaurant_id = r.id) AS comment_count
            FROM restaurants r
            WHERE r.id = %s
        """
        return self.fetchone(sql, (restaurant_id,))

    def find_by_name_or_address(
        self,
        name: Optional[str],
        address: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Another restaurant already using `name` or `address`, if any."""
        sql = """
            SELECT id, name, address
            FROM restaurants
            WHERE (name = %s OR address = %s)
              AND id IS DISTINCT FROM %s
            LIMIT 1
        """
        return self.fetchone(sql, (name, address, exclude_id))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        _check_columns(data)
        columns = ["id", *data]
        values = [str(uuid.uuid4()), *data.values()]
        sql = f"""
            INSERT INTO restaurants ({", ".join(columns)})
            VALUES ({", ".join(["%s"] * len(columns))})
            RETURNING *
        """
        row = self.write(sql, tuple(values))
        row["comment_count"] = 0
        return row

    def update(self, restaurant_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        _check_columns(data)
        if not data:
            return self.get(restaurant_id)

        assignments = ", ".join(f"{column} = %s" for column in data)
        sql = f"""
            WITH updated AS (
                UPDATE restaurants
                SET {assignments}, updated_at = NOW()
                WHERE id = %s
                RETURNING *
            )
            SELECT u.*,
                   (SELECT COUNT(*) FROM comments c WHERE c.restaurant_id = u.id) AS comment_count
            FROM updated u
        """
        return self.write(sql, (*data.values(), restaurant_id))

    def delete(self, restaurant_id: str) -> bool:
        """Delete a restaurant and its comments atomically."""
        _, deleted = self.write_many([
            ("DELETE FROM comments WHERE restaurant_id = %s", (restaurant_id,)),
            ("DELETE FROM restaurants WHERE id = %s", (restaurant_id,)),
        ])
        return deleted > 0
