"""
Per-session browser state: active category, its criteria, last results.

Switching to another category replaces the criteria with that category's
blank criteria and drops the previous results, so a filter typed for one
category never reaches a query over another.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from catalog.dataset import Category, Dataset, Record
from catalog.search import Criteria, criteria_for, search

log = logging.getLogger(__name__)


@dataclass
class BrowserState:
    category: Category = Category.CLASSROOMS
    criteria: Criteria = field(default_factory=lambda: criteria_for(Category.CLASSROOMS))
    results: list[Record] = field(default_factory=list)
    searched: bool = False

    def __post_init__(self) -> None:
        self.category = Category(self.category)
        if self.criteria.category != self.category:
            self.criteria = criteria_for(self.category)

    def select_category(self, category: Category | str) -> None:
        category = Category(category)
        if category is self.category:
            return
        log.info("category %s → %s", self.category.value, category.value)
        self.category = category
        self.reset()

    def update_criteria(self, **fields: Any) -> None:
        fields.pop("category", None)
        self.criteria = self.criteria.model_copy(update=fields)

    def run_search(self, dataset: Dataset) -> list[Record]:
        self.results = search(self.category, dataset, self.criteria)
        self.searched = True
        return self.results

    def reset(self) -> None:
        self.criteria = criteria_for(self.category)
        self.results = []
        self.searched = False
