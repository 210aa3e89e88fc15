# jewelbook/repositories/item_repository.py

from jewelbook.models.item_model import Item
from jewelbook.repositories.base import TenantRepository


class ItemRepository(TenantRepository):
    model = Item
    label = "Item"

    def ordering(self):
        return [Item.name.asc()]

    def find_by_name(self, name: str, exclude_id: int = None):
        q = self.query().filter(Item.name == name)
        if exclude_id is not None:
            q = q.filter(Item.id != exclude_id)
        return q.first()
