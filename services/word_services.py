from sqlalchemy.orm import Session

from models.word import Word
from repositories.category_repo import WordCategoryRepository
from repositories.word_source import GlobalWordSource


class WordServices:
    def __init__(self, db: Session):
        self.source = GlobalWordSource(db)
        self.category_repo = WordCategoryRepository(db)

    def list_words(self) -> list[Word]:
        return self.source.fetch_all()

    def category_tree(self) -> list[dict]:
        """Global categories with their subcategories and word totals."""
        descriptors = self.category_repo.list_all()
        tree: dict[str, dict] = {}
        for descriptor in descriptors:
            node = tree.setdefault(
                descriptor.category,
                {"category": descriptor.category, "categoryName": descriptor.category_name, "subcategories": []},
            )
            if any(sub["id"] == descriptor.subcategory for sub in node["subcategories"]):
                continue
            node["subcategories"].append({"id": descriptor.subcategory, "name": descriptor.subcategory_name, "total": 0})

        totals = self.source.count_by_subcategory({d.subcategory for d in descriptors})
        for node in tree.values():
            for sub in node["subcategories"]:
                sub["total"] = totals.get(sub["id"], 0)
        return list(tree.values())

    def import_words(self, rows: list[dict]) -> int:
        return self.source.bulk_insert(rows)

    def import_categories(self, rows: list[dict]) -> int:
        return self.category_repo.bulk_insert(rows)
