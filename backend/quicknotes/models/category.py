"""Fixed label set used for grouping and filtering notes."""

import enum
from typing import List


class Category(str, enum.Enum):

    WORK = "Work"
    PERSONAL = "Personal"
    IDEAS = "Ideas"
    OTHERS = "Others"

    @classmethod
    def labels(cls) -> List[str]:
        return [member.value for member in cls]


DEFAULT_CATEGORY = Category.OTHERS.value
