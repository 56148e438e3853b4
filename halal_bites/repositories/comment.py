from typing import Any, Dict, List, Optional
import uuid

from halal_bites.repositories.base import BaseRepository


class CommentRepository(BaseRepository):
    table = "comments"

    def list_for_restaurant(self, restaurant_id: str) -> List[Dict[str, Any]]:
        sql = """
            SELECT *
            FROM comments
            WHERE restaurant_id = %s
            ORDER BY created_at DESC
        """
        return self.fetchall(sql, (restaurant_id,))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        sql = """
            INSERT INTO comments (id, restaurant_id, content, author_name, rating, image_url)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING *
        """
        return self.write(
            sql,
            (
                str(uuid.uuid4()),
                data["restaurant_id"],
                data["content"],
                data["author_name"],
                data["rating"],
                data.get("image_url"),
            ),
        )

    def delete(self, comment_id: str) -> Optional[Dict[str, Any]]:
        """Returns the deleted row, or None if it did not exist."""
        return self.write("DELETE FROM comments WHERE id = %s RETURNING *", (comment_id,))
