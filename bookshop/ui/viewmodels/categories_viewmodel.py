from PySide6.QtCore import Signal

from bookshop.data.models import Category
from ..mvvm.bindable import BindableProperty
from ..mvvm.viewmodel import BaseViewModel


class CategoriesViewModel(BaseViewModel):
    categoriesChanged = Signal(object)
    categories = BindableProperty(default=())

    def on_navigated_to(self, parameter):
        self.run_async(self.load())

    async def load(self):
        self.is_busy = True
        try:
            self.categories = tuple(await self.repository.get_categories())
        finally:
            self.is_busy = False

    async def add_category(self, name: str, description: str = "") -> bool:
        name = name.strip()
        if not name:
            self.error_message = "Category name is required"
            return False
        if any(c.name.lower() == name.lower() for c in self.categories):
            self.error_message = f"Category {name} already exists"
            return False

        created = await self.repository.add_category(Category(name=name, description=description))
        self.categories = self.categories + (created,)
        self.error_message = ""
        return True

    async def delete_category(self, category: Category) -> bool:
        if not await self.repository.delete_category(category.id):
            return False
        self.categories = tuple(c for c in self.categories if c.id != category.id)
        return True
